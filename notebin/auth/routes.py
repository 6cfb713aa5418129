from flask import Blueprint, request, jsonify, current_app

from notebin.extensions import limiter
from notebin.auth.schemas import RegisterSchema, LoginSchema, TokenOut, MeOut
from notebin.auth.service import create_user, authenticate_user, get_user, issue_token
from notebin.common.authz import auth_required, current_user_id

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
token_out = TokenOut()
me_out = MeOut()


@bp.post("/register")
@limiter.limit(lambda: current_app.config.get("RATELIMIT_AUTH_REGISTER", "10/hour"))
def register():
    payload = request.get_json(silent=True) or {}
    data = register_schema.load(payload)

    user = create_user(data["username"], data["password"])
    return jsonify(token_out.dump(issue_token(user))), 201


@bp.post("/login")
@limiter.limit(lambda: current_app.config.get("RATELIMIT_AUTH_LOGIN", "5/minute"))
def login():
    payload = request.get_json(silent=True) or {}
    data = login_schema.load(payload)

    user = authenticate_user(data["username"], data["password"])
    return jsonify(token_out.dump(issue_token(user))), 200


@bp.get("/me")
@auth_required
def me():
    user = get_user(current_user_id())
    return jsonify(me_out.dump(user)), 200
