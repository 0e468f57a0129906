"""
Defines JSON endpoints used by the front end.

Endpoints:
- /plants: All plants in the catalogue
- /plants/search?q=: Substring search over plant names
- /plants/<id>: One plant by slug
- /propagation-requests: Create a request (POST)
- /propagation-requests/<id>: Read a request back
- /propagation-requests/<id>/guide: Plant, computed windows and recommended method
- /zone/detect: Best-effort hardiness zone for the caller
"""

from flask import Blueprint, request, jsonify, current_app
from ..extensions import limiter, get_services
from ..services.propagation import compute_windows, recommend_method, zone_recommendation
from ..utils.errors import sanitize_error, unwrap_lookup, log_info
from ..utils.location import detect_zone_for_visitor
from ..utils.validation import validate_propagation_form, soft_sanitize


api_bp = Blueprint("api", __name__)


def _propagate_rate():
    return current_app.config.get("RATELIMIT_PROPAGATE", "10 per minute; 200 per day")


def _zone_detect_rate():
    return current_app.config.get("RATELIMIT_ZONE_DETECT", "5 per minute")


@api_bp.before_request
def _enforce_ajax_for_mutations():
    """Enforce X-Requested-With header on all state-changing API requests.

    HTML forms cannot set custom headers, so this stands in for CSRF tokens
    on the JSON API (the blueprint is CSRF-exempt).
    """
    if request.method in ("POST", "PUT", "DELETE", "PATCH"):
        if request.headers.get("X-Requested-With") != "XMLHttpRequest":
            return jsonify({
                "message": "Invalid request. Please refresh the page and try again."
            }), 403


@api_bp.route("/plants")
def list_plants():
    plants, notice = unwrap_lookup(get_services().plants.get_all_plants(), [], "Plant list")
    if notice:
        return jsonify({"message": notice}), 503
    return jsonify([p.to_dict() for p in plants])


@api_bp.route("/plants/search")
def search_plants():
    """Search plants by name. `q` is required."""
    query = soft_sanitize(request.args.get("q", type=str))
    if not query:
        return jsonify({"message": "Query parameter 'q' is required"}), 400

    plants, notice = unwrap_lookup(get_services().plants.search_plants(query), [], "Plant search")
    if notice:
        return jsonify({"message": notice}), 503
    return jsonify([p.to_dict() for p in plants])


@api_bp.route("/plants/<plant_id>")
def get_plant(plant_id: str):
    plant, notice = unwrap_lookup(get_services().plants.get_plant_by_id(plant_id), None, "Plant lookup")
    if notice:
        return jsonify({"message": notice}), 503
    if not plant:
        return jsonify({"message": "Plant not found"}), 404
    return jsonify(plant.to_dict())


@api_bp.route("/propagation-requests", methods=["POST"])
@limiter.limit(_propagate_rate)
def create_propagation_request():
    """
    Create a propagation request.

    Request body (JSON):
        {"plant_id": "snake-plant", "zone": "9a", "maturity": "young", "environment": "inside"}

    Returns:
        201 with the stored request, or 400 {"message", "errors": {field: message}}
    """
    services = get_services()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"message": "Invalid request body"}), 400

    payload, errors = validate_propagation_form(data)
    if errors:
        return jsonify({"message": "Validation error", "errors": errors}), 400

    plant, notice = unwrap_lookup(services.plants.get_plant_by_id(payload["plant_id"]), None, "Plant lookup")
    if notice:
        return jsonify({"message": notice}), 503
    if not plant:
        return jsonify({"message": "Validation error", "errors": {"plant_id": "Unknown plant."}}), 400

    try:
        created = services.requests.create_request(payload)
    except Exception as e:
        return jsonify({"message": sanitize_error(e, "server", "Failed to create propagation request")}), 500

    log_info("Propagation request created", plant_id=created.plant_id, zone=created.zone)
    return jsonify(created.to_dict()), 201


@api_bp.route("/propagation-requests/<request_id>")
def get_propagation_request(request_id: str):
    found = get_services().requests.get_request(request_id)
    if not found:
        return jsonify({"message": "Propagation request not found"}), 404
    return jsonify(found.to_dict())


@api_bp.route("/propagation-requests/<request_id>/guide")
def get_propagation_guide(request_id: str):
    """
    Computed guide for a stored request.

    Query params:
        method: optional preferred-method hint (cutting, division, layering, any)
    """
    services = get_services()
    found = services.requests.get_request(request_id)
    if not found:
        return jsonify({"message": "Propagation request not found"}), 404

    plant, notice = unwrap_lookup(services.plants.get_plant_by_id(found.plant_id), None, "Plant lookup")
    if notice:
        return jsonify({"message": notice}), 503
    if not plant:
        return jsonify({"message": "Plant not found"}), 404

    method = recommend_method(plant, request.args.get("method", type=str))
    return jsonify({
        "request": found.to_dict(),
        "plant": plant.to_dict(),
        "windows": compute_windows(plant, found).to_dict(),
        "recommended_method": method,
        "zone_recommendation": zone_recommendation(plant, found.zone),
    })


@api_bp.route("/zone/detect")
@limiter.limit(_zone_detect_rate)
def detect_zone():
    """Best-effort zone for the caller; {"zone": null} when unavailable."""
    zone = detect_zone_for_visitor(get_services().zones)
    return jsonify({"zone": zone})
