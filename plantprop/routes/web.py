"""
UI routes and request flow.

Serves the home page and plant catalogue, renders the propagation form (with
the zone pre-filled from best-effort auto-detection), validates submissions,
stores a request, and renders the computed propagation guide. Keeps templates
simple by passing everything they need.
"""

from flask import Blueprint, render_template, request, redirect, url_for, current_app, abort, flash
from ..constants import ENVIRONMENTS, MATURITY_LEVELS, USDA_ZONES
from ..extensions import limiter, get_services
from ..services.propagation import compute_windows, recommend_method, steps_for_method, zone_recommendation
from ..utils.errors import unwrap_lookup, sanitize_error, log_info
from ..utils.location import cached_zone, detect_zone_for_visitor
from ..utils.validation import validate_propagation_form, normalize_zone, soft_sanitize, ZONE_CHOICES

FEATURED_COUNT = 6

web_bp = Blueprint("web", __name__)


def _propagate_rate():
    return current_app.config.get("RATELIMIT_PROPAGATE", "10 per minute; 200 per day")


def _load_plant_or_404(plant_id: str):
    plant, notice = unwrap_lookup(get_services().plants.get_plant_by_id(plant_id), None, "Plant lookup")
    if notice:
        flash(notice, "warning")
    if not plant:
        abort(404)
    return plant


@limiter.exempt
@web_bp.route("/healthz")
def healthz():
    """Simple health endpoint to verify the server responds."""
    return "OK", 200


@web_bp.route("/")
def index():
    """Homepage with plant search and a handful of featured plants."""
    plants, notice = unwrap_lookup(get_services().plants.get_all_plants(), [], "Featured plants")
    return render_template("home.html", plants=plants[:FEATURED_COUNT], notice=notice)


@web_bp.route("/plants")
def all_plants():
    """Full catalogue, or search results when ?q= is given."""
    store = get_services().plants
    query = soft_sanitize(request.args.get("q", type=str))
    if query:
        plants, notice = unwrap_lookup(store.search_plants(query), [], "Plant search")
    else:
        plants, notice = unwrap_lookup(store.get_all_plants(), [], "Plant list")
    return render_template("all_plants.html", plants=plants, query=query, notice=notice)


# URL: /propagate/<plant_id>
# Endpoint: web.propagate
# Purpose: collect zone, maturity and environment for one plant
@web_bp.route("/propagate/<plant_id>", methods=["GET", "POST"])
@limiter.limit(_propagate_rate, methods=["POST"])
def propagate(plant_id: str):
    """
    Propagation form.

    GET: Render the form; the zone is pre-filled from the session-cached or
         freshly detected zone when available.
    POST: Validate, store a new request, redirect to its results page.
    """
    services = get_services()
    plant = _load_plant_or_404(plant_id)

    if request.method == "POST":
        form = dict(request.form)
        form["plant_id"] = plant.id
        payload, errors = validate_propagation_form(form)
        if errors:
            return render_template(
                "propagation_form.html",
                plant=plant,
                form_values=form,
                errors=errors,
                zones=USDA_ZONES,
                maturity_levels=MATURITY_LEVELS,
                environments=ENVIRONMENTS,
                detected_zone=cached_zone(),
            ), 400

        try:
            created = services.requests.create_request(payload)
        except Exception as e:
            flash(sanitize_error(e, "server", "Failed to create propagation request"), "error")
            return redirect(url_for("web.propagate", plant_id=plant.id))

        log_info("Propagation request created", plant_id=created.plant_id, zone=created.zone)
        return redirect(url_for("web.results", request_id=created.id))

    detected = detect_zone_for_visitor(services.zones)
    form_values = {"zone": detected if detected in ZONE_CHOICES else ""}
    return render_template(
        "propagation_form.html",
        plant=plant,
        form_values=form_values,
        errors={},
        zones=USDA_ZONES,
        maturity_levels=MATURITY_LEVELS,
        environments=ENVIRONMENTS,
        detected_zone=detected,
    )


@web_bp.route("/results/<request_id>")
def results(request_id: str):
    """
    Propagation guide for a stored request.

    Query params:
        method: preferred-method hint, or an exact method name to open its tab
    """
    services = get_services()
    found = services.requests.get_request(request_id)
    if not found:
        abort(404)
    plant = _load_plant_or_404(found.plant_id)

    hint = request.args.get("method", type=str)
    selected = hint if hint in plant.methods else recommend_method(plant, hint)

    return render_template(
        "results.html",
        plant=plant,
        prop_request=found,
        result=compute_windows(plant, found),
        recommended_method=recommend_method(plant, hint),
        selected_method=selected,
        steps=steps_for_method(plant, selected),
        zone_advice=zone_recommendation(plant, found.zone),
        zones=[z[0] for z in USDA_ZONES],
    )


@web_bp.route("/results/<request_id>/zone", methods=["POST"])
@limiter.limit(_propagate_rate)
def change_zone(request_id: str):
    """Create a new request with a different zone; the original is never modified."""
    services = get_services()
    found = services.requests.get_request(request_id)
    if not found:
        abort(404)

    payload, errors = validate_propagation_form({
        "plant_id": found.plant_id,
        "zone": normalize_zone(request.form.get("zone")),
        "maturity": found.maturity,
        "environment": found.environment,
    })
    if errors:
        flash(errors.get("zone", "Failed to change zone."), "error")
        return redirect(url_for("web.results", request_id=found.id))

    created = services.requests.create_request(payload)
    return redirect(url_for("web.results", request_id=created.id))
