"""
Tests for controller discovery and tree-sitter based method listing.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from tests.infrastructure import write
from viewref.controllers import (
    ControllerDocument,
    find_controller,
    find_method,
    is_controller_file,
    list_controller_methods,
    list_controller_modules,
)
from viewref.project import Project
from viewref.types import ControllerMethod


def _controller(tmp_path: Path, source: str, name: str = "C.ts") -> Path:
    return write(tmp_path / name, textwrap.dedent(source).lstrip())


class TestPublicMethods:

    def test_fixture_users_controller(self, edge_root: Path):
        path = edge_root / "app" / "Controllers" / "Http" / "UsersController.ts"
        assert list_controller_methods(path) == [
            ControllerMethod("index", 3),
            ControllerMethod("show", 7),
            ControllerMethod("store", 11),
        ]

    def test_default_export_of_identifier(self, edge_root: Path):
        path = edge_root / "app" / "Controllers" / "Http" / "PostsController.ts"
        assert [m.name for m in list_controller_methods(path)] == ["index", "destroy"]

    def test_default_export_wins_over_named(self, tmp_path: Path):
        path = _controller(tmp_path, """
            export class Helper {
              public help() {}
            }

            export default class Main {
              public run() {}
            }
        """)
        assert [m.name for m in list_controller_methods(path)] == ["run"]

    def test_named_export_when_no_default(self, tmp_path: Path):
        path = _controller(tmp_path, """
            export class OnlyNamed {
              public go() {}
            }
        """)
        assert [m.name for m in list_controller_methods(path)] == ["go"]

    def test_non_exported_class_is_ignored(self, tmp_path: Path):
        path = _controller(tmp_path, """
            class Hidden {
              public go() {}
            }
        """)
        assert list_controller_methods(path) == []

    def test_plain_javascript(self, tmp_path: Path):
        path = _controller(tmp_path, """
            export default class UsersController {
              async index({ view }) {
                return view.render('users.index')
              }

              store = async () => {}
            }
        """, name="UsersController.js")
        assert [m.name for m in list_controller_methods(path)] == ["index", "store"]

    def test_non_function_fields_are_skipped(self, tmp_path: Path):
        path = _controller(tmp_path, """
            export default class C {
              public perPage = 20
              public handler = function () {}
            }
        """)
        assert [m.name for m in list_controller_methods(path)] == ["handler"]

    def test_syntax_errors_are_tolerated(self, tmp_path: Path):
        path = _controller(tmp_path, """
            export default class Fine {
              public ok() {}
            }

            const broken = (
        """)
        assert [m.name for m in list_controller_methods(path)] == ["ok"]

    def test_missing_file(self, tmp_path: Path):
        assert list_controller_methods(tmp_path / "nope.ts") == []

    def test_find_method(self, edge_root: Path):
        path = edge_root / "app" / "Controllers" / "Http" / "UsersController.ts"
        assert find_method(path, "show") == ControllerMethod("show", 7)
        assert find_method(path, "audit") is None
        assert find_method(path, "constructor") is None


class TestControllerDocument:

    def test_has_error(self):
        assert not ControllerDocument("export default class A {}\n", ".ts").has_error()
        assert ControllerDocument("export default class {{{", ".ts").has_error()

    def test_exported_classes_order(self):
        doc = ControllerDocument(
            "export class B {}\nclass A {}\nexport default A\n",
            "ts",
        )
        names = [doc.get_node_text(c.child_by_field_name("name")) for c in doc.exported_classes()]
        assert names == ["A", "B"]


class TestLocateControllers:

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("UsersController.ts", True),
            ("UsersController.js", True),
            ("Admin/PostsController.TS", True),
            ("UsersController.spec.ts", False),
            ("UsersController.test.js", False),
            ("types.d.ts", False),
            ("_BaseController.ts", False),
            ("README.md", False),
        ],
    )
    def test_is_controller_file(self, name: str, expected: bool):
        assert is_controller_file(name, [".ts", ".js"]) is expected

    def test_find_controller(self, project: Project, edge_root: Path):
        http = edge_root / "app" / "Controllers" / "Http"
        assert find_controller(project, "UsersController") == http / "UsersController.ts"
        assert find_controller(project, "admin/dashboardcontroller") == http / "Admin" / "DashboardController.ts"
        assert find_controller(project, "NopeController") is None
        assert find_controller(project, "") is None

    def test_extension_order(self, tmp_path: Path):
        write(tmp_path / "app" / "Controllers" / "Http" / "A.js", "")
        write(tmp_path / "app" / "Controllers" / "Http" / "A.ts", "")
        found = find_controller(Project(tmp_path), "A")
        assert found is not None and found.name == "A.ts"

    def test_list_modules(self, project: Project):
        assert sorted(list_controller_modules(project)) == [
            "Admin/DashboardController",
            "HelpersController",
            "PostsController",
            "UsersController",
        ]

    def test_ts_and_js_are_one_module(self, tmp_path: Path):
        write(tmp_path / "app" / "Controllers" / "Http" / "A.js", "")
        write(tmp_path / "app" / "Controllers" / "Http" / "A.ts", "")
        assert list_controller_modules(Project(tmp_path)) == ["A"]

    def test_missing_controllers_dir(self, tmp_path: Path):
        assert list_controller_modules(Project(tmp_path)) == []
