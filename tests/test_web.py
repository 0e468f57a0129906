import re

from plantprop.utils.location import SESSION_ZONE_KEY

FORM = {"zone": "9a", "maturity": "young", "environment": "inside"}


def _request_id(location):
    return re.search(r"/results/([^/?]+)", location).group(1)


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.data == b"OK"


def test_security_headers(client):
    resp = client.get("/")
    assert "default-src 'self'" in resp.headers["Content-Security-Policy"]
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_home_lists_featured_plants(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Golden Pothos" in resp.data


def test_search_page(client):
    resp = client.get("/plants?q=snake")
    assert resp.status_code == 200
    assert b"Snake Plant" in resp.data
    assert b"Golden Pothos" not in resp.data


def test_propagation_form_renders(client):
    resp = client.get("/propagate/snake-plant")
    assert resp.status_code == 200
    assert b"Snake Plant" in resp.data
    assert b'name="zone"' in resp.data


def test_propagation_form_prefills_cached_zone(client):
    with client.session_transaction() as sess:
        sess[SESSION_ZONE_KEY] = "10b"
    resp = client.get("/propagate/snake-plant")
    assert b'value="10b" selected' in resp.data


def test_unknown_plant_is_404(client):
    assert client.get("/propagate/no-such-plant").status_code == 404


def test_invalid_submission_rerenders_with_errors(client):
    resp = client.post("/propagate/snake-plant", data={"zone": "9a"})
    assert resp.status_code == 400
    assert b"Plant maturity is required." in resp.data
    assert b"Environment is required." in resp.data


def test_submission_redirects_to_results(client):
    resp = client.post("/propagate/golden-pothos", data=FORM)
    assert resp.status_code == 302
    assert "/results/" in resp.headers["Location"]

    page = client.get(resp.headers["Location"])
    assert page.status_code == 200
    assert b"March 1" in page.data
    assert b"June 30" in page.data
    assert b"Late Summer" in page.data


def test_method_tab_selection(client):
    location = client.post("/propagate/golden-pothos", data=FORM).headers["Location"]
    request_id = _request_id(location)

    page = client.get(f"/results/{request_id}?method=node-cutting")
    assert page.status_code == 200
    assert b"Node Cutting" in page.data


def test_zone_change_creates_new_request(app, client, services):
    location = client.post("/propagate/golden-pothos", data=FORM).headers["Location"]
    original_id = _request_id(location)

    resp = client.post(f"/results/{original_id}/zone", data={"zone": "5a"})
    assert resp.status_code == 302
    new_id = _request_id(resp.headers["Location"])

    assert new_id != original_id
    assert services.requests.get_request(original_id).zone == "9a"
    assert services.requests.get_request(new_id).zone == "5a"
    assert services.requests.get_request(new_id).maturity == "young"


def test_zone_change_rejects_invalid_zone(client, services):
    location = client.post("/propagate/golden-pothos", data=FORM).headers["Location"]
    original_id = _request_id(location)

    resp = client.post(f"/results/{original_id}/zone", data={"zone": "99z"})
    assert resp.status_code == 302
    assert _request_id(resp.headers["Location"]) == original_id
    assert len(services.requests) == 1


def test_unknown_results_is_404(client):
    assert client.get("/results/does-not-exist").status_code == 404


def test_results_without_secondary_window_in_unlisted_zone(fern_client):
    resp = fern_client.post("/propagate/rabbit-foot-fern", data={**FORM, "zone": "6a"})
    assert resp.status_code == 302

    page = fern_client.get(resp.headers["Location"])
    assert page.status_code == 200
    assert b"Zone 6a climate" in page.data
    assert b"March 15-31" in page.data
    assert b"November 1-15" in page.data
    assert b"Spring Growth Period" in page.data
    assert b"Late Summer" not in page.data
