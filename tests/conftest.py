"""Root test configuration: sample documentation shared across suites"""

import pytest


USER_DOC = """\
# Users

A user resource.

<!-- {"blockType": "resource", "@odata.type": "user"} -->
```json
{
  "id": 0,
  "name": "string"
}
```

## Get a user

<!-- {"blockType": "request", "parameters": ["id"]} -->
```http
GET /users/{id} HTTP/1.1
Accept: application/json
```

<!-- {"blockType": "response", "@odata.type": "user"} -->
```http
HTTP/1.1 200 OK
Content-Type: application/json
ETag: "abc"

{"id": 5, "name": "Ada"}
```
"""

SCENARIOS_YAML = """\
scenarios:
  - name: get-user
    method: "/users.md #0"
    placeholders:
      id: 5
    expectations:
      "$.id": 5
      "$.name": ["Ada", "Grace"]
      "ETag:": '"abc"'
      "Content-Type:":
  - name: wrong-name
    method: "/users.md #0"
    expectations:
      "$.name": "Grace"
  - name: disabled
    method: "/users.md #0"
    enabled: false
    expectations:
      "$.missing": 1
"""


@pytest.fixture(name="docs_dir")
def docs_dir_fixture(tmp_path):
    """A documentation directory holding users.md."""
    root = tmp_path / "docs"
    root.mkdir()
    (root / "users.md").write_text(USER_DOC, encoding="utf-8")
    return root


@pytest.fixture(name="scenarios_file")
def scenarios_file_fixture(tmp_path):
    path = tmp_path / "scenarios.yaml"
    path.write_text(SCENARIOS_YAML, encoding="utf-8")
    return path
