"""CLI entrypoint: Typer app definition and command registration"""

import typer

from apidocs.cli.commands import check_cmd, scan_cmd


app = typer.Typer(name="apidocs", no_args_is_help=True, help="Check API documentation examples against live responses")

app.command(name="scan")(scan_cmd)
app.command(name="check")(check_cmd)
