from flask import Blueprint, jsonify, request

from kennel.dog import BreedRef, DogCreate, DogQuery, DogUpdate
from kennel.routes.common import (
    current_owner_id,
    json_body,
    list_response,
    optional_typed,
    pagination_from_args,
    parse_date,
    require,
    require_typed,
    string_list,
)
from kennel.service import CatalogService

bp = Blueprint("dogs", __name__)
catalog = CatalogService()

# Scalar fields a PUT may change, with their JSON types
UPDATABLE_FIELDS = {
    "name": str,
    "gender": str,
    "is_sterilized": bool,
    "introduction": str,
    "owner_id": str,
    "portrait_id": str,
}


@bp.route("", methods=["POST"])
def create_dog():
    """Create a dog owned by the caller."""
    owner_id = current_owner_id()
    data = json_body()

    dog = catalog.create_dog(
        owner_id,
        DogCreate(
            name=require_typed(data, "name", str),
            breed=BreedRef(require_typed(data, "breed", str)),
            birthday=parse_date(require(data, "birthday")),
            gender=optional_typed(data, "gender", str, "Other"),
            is_sterilized=optional_typed(data, "is_sterilized", bool, False),
            introduction=optional_typed(data, "introduction", str, ""),
            tags=string_list(data, "tags") or [],
            portrait_id=optional_typed(data, "portrait_id", str),
        ),
    )

    return jsonify(dog.to_dict()), 201


@bp.route("", methods=["GET"])
def list_dogs():
    """List dogs by id(s) and/or owner."""
    query = DogQuery(
        id_eq=request.args.get("id"),
        id_in=request.args.getlist("id_in") or None,
        owner_id_eq=request.args.get("owner_id"),
        breed_eq=request.args.get("breed"),
    )
    page = catalog.query_dogs(query, pagination_from_args())
    return list_response(page)


@bp.route("/mine", methods=["GET"])
def my_dogs():
    """List the caller's dogs."""
    page = catalog.my_dogs(current_owner_id(), pagination_from_args())
    return list_response(page)


@bp.route("/exists", methods=["GET"])
def is_owner_of_the_dog():
    """Check whether owner_id owns dog id."""
    dog_id = request.args.get("id")
    owner_id = request.args.get("owner_id")
    if not dog_id or not owner_id:
        return jsonify({"error": "id and owner_id are required"}), 400

    is_owner = catalog.is_owner_of_the_dog(owner_id, dog_id)
    return jsonify({"is_owner": is_owner})


@bp.route("/<dog_id>", methods=["PUT"])
def update_dog(dog_id: str):
    """Partially update a dog; absent fields are left alone."""
    data = json_body()

    fields = {
        key: optional_typed(data, key, kind)
        for key, kind in UPDATABLE_FIELDS.items()
        if data.get(key) is not None
    }
    if data.get("tags") is not None:
        fields["tags"] = string_list(data, "tags")
    if data.get("breed") is not None:
        fields["breed"] = BreedRef(require_typed(data, "breed", str))
    if data.get("birthday") is not None:
        fields["birthday"] = parse_date(data["birthday"])

    updated = catalog.update_dog(dog_id, DogUpdate(**fields))
    return jsonify({"updated": updated})


@bp.route("/<dog_id>/portrait", methods=["PUT"])
def update_dog_portrait(dog_id: str):
    """Attach a new portrait image to a dog."""
    data = json_body()
    has_updated = catalog.update_dog_portrait(dog_id, require_typed(data, "portrait_id", str))
    return jsonify({"has_updated": has_updated})


@bp.route("/<dog_id>", methods=["DELETE"])
def delete_dog(dog_id: str):
    """Delete a dog."""
    deleted = catalog.delete_dog(dog_id)
    return jsonify({"deleted": deleted})
