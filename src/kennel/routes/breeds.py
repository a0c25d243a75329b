from flask import Blueprint, jsonify, request

from kennel.breed import BreedCreate, BreedQuery, Category
from kennel.routes.common import json_body, list_response, pagination_from_args, require_typed
from kennel.service import CatalogService

bp = Blueprint("breeds", __name__)
catalog = CatalogService()


@bp.route("", methods=["GET"])
def list_breeds():
    """List breeds, optionally by category."""
    category = request.args.get("category")
    query = BreedQuery(category_eq=Category(category) if category else None)
    page = catalog.query_breeds(query, pagination_from_args())
    return list_response(page)


@bp.route("", methods=["POST"])
def create_breed():
    """Create a new breed."""
    data = json_body()

    breed_id = catalog.create_breed(
        BreedCreate(
            category=Category(require_typed(data, "category", str)),
            name=require_typed(data, "name", str),
        )
    )

    return jsonify({"id": breed_id}), 201


@bp.route("/<breed_id>", methods=["PATCH"])
def update_breed(breed_id: str):
    """Rename a breed."""
    data = json_body()
    updated = catalog.rename_breed(breed_id, require_typed(data, "name", str))
    return jsonify({"updated": updated})


@bp.route("/<breed_id>", methods=["DELETE"])
def delete_breed(breed_id: str):
    """Delete a breed. Dogs of this breed are kept."""
    deleted = catalog.delete_breed(breed_id)
    return jsonify({"deleted": deleted})
