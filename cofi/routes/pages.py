"""Page view endpoints.

Every page returns a JSON view model carrying ``in_pip`` so clients can
collapse controls while the app is shown in the floating window, plus
the routes the page can navigate to.

Routes:
    GET  /, /list                 -> recipe list
    GET  /recipe/<id>             -> recipe details
    POST /recipe/<id>/timer       -> timer start/stop report
    POST /recipe/<id>/finish      -> stamp last finished time
    GET  /edit/<id>, POST save, POST /edit/<id>/delete
    GET  /add_recipe, POST create
    GET  /settings, POST update, /settings/about, /settings/licenses
    GET  /deeplink?url=...        -> redirect to the mapped page
"""
from __future__ import annotations

from importlib import metadata as importlib_metadata
from typing import Any, Dict, List

from flask import Blueprint, jsonify, redirect, request

from cofi import config as app_config
from cofi.navigation import ADD_RECIPE, EDIT, LIST
from cofi.services import recipes_service
from cofi.services.recipes_service import RecipeNotFoundError, RecipeValidationError
from cofi.services.settings_store import DEFAULTS as SETTING_DEFAULTS, SettingsValidationError
from cofi.shell import current_shell
from cofi.utils.logging import get_logger

LOG = get_logger("cofi.pages")

bp = Blueprint("pages", __name__)

LICENSED_DISTRIBUTIONS = ("Flask", "Werkzeug", "SQLAlchemy", "Jinja2", "itsdangerous", "click")


def _page(**payload: Any):
    shell = current_shell()
    payload["in_pip"] = shell.coordinator.is_in_pip.value
    return jsonify(payload)


def _error(code: str, status: int):
    return jsonify({"error": code}), status


@bp.errorhandler(RecipeValidationError)
def _recipe_invalid(exc: RecipeValidationError):
    return _error(str(exc), 400)


@bp.errorhandler(RecipeNotFoundError)
def _recipe_missing(exc: RecipeNotFoundError):
    return _error(str(exc), 404)


@bp.errorhandler(SettingsValidationError)
def _setting_invalid(exc: SettingsValidationError):
    return _error(str(exc), 400)


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _leave_editor(shell) -> None:
    """Go back from the editor; other destinations on top stay put."""
    if shell.nav.current.destination in (EDIT, ADD_RECIPE):
        shell.nav.pop_back_stack()


@bp.route("/", methods=["GET"])
@bp.route("/list", methods=["GET"])
def recipe_list():
    recipes = recipes_service.list_recipes()
    return _page(
        page=LIST,
        recipes=recipes,
        links={
            "recipes": {str(r["id"]): f"recipe/{r['id']}" for r in recipes},
            "add_recipe": "add_recipe",
            "settings": "settings",
        },
    )


@bp.route("/recipe/<int:recipe_id>", methods=["GET"])
def recipe_details(recipe_id: int):
    view = recipes_service.get_recipe(recipe_id)
    shell = current_shell()
    return _page(
        page="recipe",
        can_enter_pip=shell.coordinator.can_enter_pip.value,
        links={"edit": f"edit/{recipe_id}"},
        **view.as_dict(),
    )


@bp.route("/recipe/<int:recipe_id>/timer", methods=["POST"])
def recipe_timer(recipe_id: int):
    running = _json_body().get("running")
    if not isinstance(running, bool):
        return _error("running_required", 400)
    coordinator = current_shell().coordinator
    coordinator.on_timer_running_changed(running)
    LOG.debug("Timer for recipe id=%s running=%s", recipe_id, running)
    return jsonify(coordinator.state())


@bp.route("/recipe/<int:recipe_id>/finish", methods=["POST"])
def recipe_finish(recipe_id: int):
    recipe = recipes_service.finish_recipe(recipe_id)
    return jsonify({"recipe": recipe})


@bp.route("/edit/<int:recipe_id>", methods=["GET"])
def recipe_edit(recipe_id: int):
    view = recipes_service.recipe_for_edit(recipe_id)
    return _page(page="edit", is_editing=True, **view.as_dict())


@bp.route("/edit/<int:recipe_id>", methods=["POST"])
def recipe_save(recipe_id: int):
    body = _json_body()
    view = recipes_service.save_recipe(recipe_id, body.get("recipe"), body.get("steps"))
    shell = current_shell()
    _leave_editor(shell)
    return jsonify({"status": "ok", "current": shell.nav.current.route, **view.as_dict()})


@bp.route("/edit/<int:recipe_id>/delete", methods=["POST"])
def recipe_delete(recipe_id: int):
    removed = recipes_service.delete_recipe(recipe_id)
    shell = current_shell()
    shell.nav.navigate(LIST, pop_up_to=LIST, inclusive=True)
    return jsonify({"deleted": removed, "current": shell.nav.current.route})


@bp.route("/add_recipe", methods=["GET"])
def recipe_add_form():
    return _page(
        page="add_recipe",
        is_editing=False,
        recipe={"name": "", "description": "", "icon": "Infusion"},
        steps=[],
    )


@bp.route("/add_recipe", methods=["POST"])
def recipe_add():
    body = _json_body()
    recipe_id = recipes_service.add_recipe(body.get("recipe"), body.get("steps"))
    shell = current_shell()
    _leave_editor(shell)
    return jsonify({"id": recipe_id, "current": shell.nav.current.route}), 201


@bp.route("/settings", methods=["GET"])
def settings_list():
    return _page(
        page="settings",
        settings=current_shell().settings.all(),
        links={"about": "settings/about"},
    )


@bp.route("/settings", methods=["POST"])
def settings_update():
    body = _json_body()
    key = body.get("key")
    if not key:
        return _error("key_required", 400)
    if "value" not in body:
        return _error("value_required", 400)
    value = current_shell().settings.set(str(key), body["value"])
    return jsonify({"status": "ok", "key": key, "value": value})


@bp.route("/settings/about", methods=["GET"])
def settings_about():
    return _page(
        page="about",
        app=app_config.metadata(),
        defaults=dict(SETTING_DEFAULTS),
        links={"licenses": "settings/licenses"},
    )


def _licenses() -> List[Dict[str, Any]]:
    entries: List[Dict[str, Any]] = []
    for name in LICENSED_DISTRIBUTIONS:
        try:
            meta = importlib_metadata.metadata(name)
        except importlib_metadata.PackageNotFoundError:
            LOG.debug("Distribution %s not installed; skipping license entry", name)
            continue
        entries.append({
            "name": meta.get("Name", name),
            "version": meta.get("Version"),
            "license": meta.get("License-Expression") or meta.get("License") or "UNKNOWN",
            "homepage": meta.get("Home-page"),
        })
    return entries


@bp.route("/settings/licenses", methods=["GET"])
def settings_licenses():
    return _page(page="licenses", licenses=_licenses())


@bp.route("/deeplink", methods=["GET"])
def deep_link():
    url = request.args.get("url", "")
    entry = current_shell().nav.handle_deep_link(url)
    if entry is None:
        return _error("deep_link_unrecognized", 404)
    return redirect("/" + entry.route)


def register_pages(app: Any) -> None:
    if getattr(app, "_cofi_pages", False):  # idempotent
        return
    app.register_blueprint(bp)
    setattr(app, "_cofi_pages", True)
    LOG.debug("pages blueprint registered")


__all__ = ["register_pages", "bp"]
