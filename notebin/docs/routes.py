# notebin/docs/routes.py
from flask import Blueprint, jsonify
from .spec import build_spec

bp = Blueprint("docs", __name__)

@bp.get("/openapi.json")
def openapi_json():
    return jsonify(build_spec())
