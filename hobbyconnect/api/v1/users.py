"""User profile endpoints."""

from __future__ import annotations

from flask import Blueprint

from hobbyconnect.api.deps import current_user_id, json_response, load_json, require_auth, timing
from hobbyconnect.core.auth import get_auth
from hobbyconnect.schemas import AccountSchema, ContactSchema, ProfileUpdateSchema
from hobbyconnect.services.users.dto import ProfileUpdateIn

bp = Blueprint("users", __name__)

account_schema = AccountSchema()
contact_schema = ContactSchema()
profile_update_schema = ProfileUpdateSchema()


@bp.get("/<string:user_id>")
@timing
def get_user(user_id: str):
    account = get_auth().users.get_user(user_id)
    return json_response({"data": account_schema.dump(account)})


@bp.get("/by-email/<path:email>")
@timing
def get_user_by_email(email: str):
    contact = get_auth().users.get_by_email(email)
    return json_response(contact_schema.dump(contact))


@bp.put("/<string:user_id>")
@require_auth
@timing
def update_user(user_id: str):
    """Update the caller's own profile (403 for anyone else's)."""

    data = load_json(profile_update_schema)
    account = get_auth().users.update_profile(
        ProfileUpdateIn(user_id=user_id, actor_id=current_user_id(), **data)
    )
    return json_response({"data": account_schema.dump(account)})
