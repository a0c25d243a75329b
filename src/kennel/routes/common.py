from datetime import date, datetime

from flask import jsonify, request
from werkzeug.exceptions import BadRequest

from kennel.errors import InvalidIdentifier, InvalidReference, StoreUnavailable
from kennel.logger import get_logger
from kennel.query import Page, Pagination

logger = get_logger(__name__)

USER_ID_HEADER = "X-User-ID"


def current_owner_id() -> str:
    """The caller identity, as supplied by the upstream auth layer."""
    owner_id = request.headers.get(USER_ID_HEADER)
    if not owner_id:
        raise BadRequest("no user id")
    return owner_id


DEFAULT_PAGE_SIZE = 20


def _int_arg(key: str) -> int | None:
    value = request.args.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as err:
        raise BadRequest(f"{key} must be an integer, got {value!r}") from err


def pagination_from_args() -> Pagination | None:
    """
    Read ?page=&size= (1-based page). Both absent means no pagination.

    A missing page defaults to 1 and a missing size to DEFAULT_PAGE_SIZE;
    present values are used as given and rejected when out of range.
    """
    page = _int_arg("page")
    size = _int_arg("size")
    if page is None and size is None:
        return None
    return Pagination.from_page(
        1 if page is None else page,
        DEFAULT_PAGE_SIZE if size is None else size,
    )


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("request body must be a JSON object")
    return data


def require(data: dict, key: str):
    if data.get(key) is None:
        raise BadRequest(f"missing field: {key}")
    return data[key]


def _check_type(key: str, value, kind):
    # bool is an int subclass; it only satisfies an explicit bool
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is not bool):
        raise BadRequest(f"{key} must be of type {kind.__name__}")
    return value


def require_typed(data: dict, key: str, kind):
    """Like require(), but the value must also be an instance of kind."""
    return _check_type(key, require(data, key), kind)


def optional_typed(data: dict, key: str, kind, default=None):
    """The value of an optional field, checked against kind when present."""
    value = data.get(key)
    if value is None:
        return default
    return _check_type(key, value, kind)


def string_list(data: dict, key: str) -> list[str] | None:
    """An optional list of strings; None when the field is absent."""
    value = optional_typed(data, key, list)
    if value is not None and not all(isinstance(v, str) for v in value):
        raise BadRequest(f"{key} must be a list of strings")
    return value


def parse_date(value) -> date:
    """Accept a plain ISO date or a full ISO timestamp."""
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(value).date()
    except (TypeError, ValueError) as err:
        raise BadRequest(f"invalid date: {value!r}") from err


def list_response(page: Page):
    return jsonify({"list": [item.to_dict() for item in page.items], "total": page.total})


def register_error_handlers(app) -> None:
    """Map catalog errors to JSON responses."""

    @app.errorhandler(BadRequest)
    def bad_request(e):
        return jsonify({"error": e.description}), 400

    @app.errorhandler(InvalidIdentifier)
    def invalid_identifier(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(ValueError)
    def invalid_value(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(InvalidReference)
    def invalid_reference(e):
        return jsonify({"error": str(e)}), 422

    @app.errorhandler(StoreUnavailable)
    def store_unavailable(e):
        logger.error(f"{request.method} {request.path}: {e}")
        return jsonify({"error": str(e)}), 503
