"""
Tests for route handler links ('UsersController.index' -> controller file).
"""

from __future__ import annotations

from pathlib import Path

from tests.infrastructure import EdgeProjectBuilder
from viewref.linking import document_links, resolve_route_links
from viewref.project import Project
from viewref.types import Position, ReferenceKind

ROUTES = (
    "import Route from '@ioc:Adonis/Core/Route'\n"
    "\n"
    "Route.get('/users', 'UsersController.index')\n"
    "Route.get('/users/:id', 'UsersController.missing')\n"
    "Route.post('/posts', \"PostsController\")\n"
    "Route.get('/nope', 'NopeController.index')\n"
    "Route.get('/admin', 'Admin/DashboardController.home')\n"
)


def _http(root: Path) -> Path:
    return root / "app" / "Controllers" / "Http"


class TestRouteLinks:

    def test_handlers_resolve_to_controllers(self, project: Project, edge_root: Path):
        links = {lk.text: lk for lk in resolve_route_links(ROUTES, project)}

        assert set(links) == {
            "UsersController.index",
            "UsersController.missing",
            "PostsController",
            "Admin/DashboardController.home",
        }
        assert links["UsersController.index"].target_path == _http(edge_root) / "UsersController.ts"
        assert links["Admin/DashboardController.home"].target_path == _http(edge_root) / "Admin" / "DashboardController.ts"
        assert all(lk.kind is ReferenceKind.ROUTE_HANDLER for lk in links.values())

    def test_span_covers_handler_string(self, project: Project):
        links = {lk.text: lk for lk in resolve_route_links(ROUTES, project)}
        assert links["UsersController.index"].position == Position(line=2, col_start=21, col_end=42)

    def test_target_line_of_known_method(self, project: Project):
        links = {lk.text: lk for lk in resolve_route_links(ROUTES, project)}
        assert links["UsersController.index"].target_line == 3
        assert links["Admin/DashboardController.home"].target_line == 1

    def test_unknown_method_keeps_link_without_line(self, project: Project):
        links = {lk.text: lk for lk in resolve_route_links(ROUTES, project)}
        assert links["UsersController.missing"].target_line is None
        assert links["PostsController"].target_line is None

    def test_module_lookup_is_case_insensitive(self, project: Project, edge_root: Path):
        links = resolve_route_links("Route.get('/', 'userscontroller.show')", project)
        assert [lk.target_path for lk in links] == [_http(edge_root) / "UsersController.ts"]
        assert links[0].target_line == 7

    def test_underscored_modules_are_not_controllers(self, tmp_path: Path):
        root = EdgeProjectBuilder(tmp_path).with_controller("_Base.ts", "export default class Base {}\n").build()
        assert resolve_route_links("Route.get('/', '_Base.index')", Project(root)) == []

    def test_unquoted_or_non_route_calls_are_ignored(self, project: Project):
        text = "const h = 'UsersController.index'\nrouter.handle(UsersController)\n"
        assert resolve_route_links(text, project) == []


class TestDocumentLinks:

    def test_code_gets_render_and_route_links(self, project: Project):
        text = (
            "Route.get('/', 'UsersController.index')\n"
            "Route.get('/welcome', async ({ view }) => view.render('welcome'))\n"
        )
        kinds = sorted(lk.kind.value for lk in document_links(text, "code", project))
        assert kinds == ["render", "route-handler"]

    def test_templates_get_no_route_links(self, project: Project):
        text = "{{-- Route.get('/', 'UsersController.index') --}}\n"
        assert document_links(text, "template", project) == []
