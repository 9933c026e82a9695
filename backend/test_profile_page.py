import httpx

PROFILE_URL = "https://www.linkedin.com/in/ada-lovelace/"

FULL_PROFILE = {
    "full_name": "Ada Lovelace",
    "profile_pic_url": "https://media.example.com/ada.jpg",
    "headline": "First programmer",
    "occupation": "Analyst at Analytical Engine Co",
    "city": "London",
    "state": None,
    "country_full_name": "United Kingdom",
    "summary": "Notes on the engine.",
    "experiences": [
        {
            "title": "Analyst",
            "company": "Analytical Engine Co",
            "location": "London",
            "starts_at": {"day": 1, "month": 6, "year": 1842},
            "ends_at": {"day": 1, "month": 9, "year": 1843},
            "description": "Wrote the first algorithm.",
        }
    ],
    "education": [
        {
            "school": "Home schooling",
            "degree_name": "Mathematics",
            "field_of_study": "Logic",
            "starts_at": {"year": 1830},
            "ends_at": None,
        }
    ],
    "skills": ["Mathematics", "Algorithms"],
    "accomplishment_projects": [
        {"title": "Note G", "url": "https://example.com/note-g", "description": "Bernoulli numbers"}
    ],
}


def test_empty_form_makes_no_request(client, upstream):
    response = client.get("/")

    assert response.status_code == 200
    assert "LinkedIn Profile Viewer" in response.text
    assert 'name="url"' in response.text
    assert 'id="profile"' not in response.text
    assert upstream.requests == []


def test_blank_url_shows_error(client, upstream):
    response = client.get("/", params={"url": "  "})

    assert response.status_code == 400
    assert "LinkedIn URL is required" in response.text
    assert upstream.requests == []


def test_renders_all_sections(client, upstream):
    upstream.respond(200, json=FULL_PROFILE)

    response = client.get("/", params={"url": PROFILE_URL})

    assert response.status_code == 200
    html = response.text
    assert "Ada Lovelace" in html
    assert "https://media.example.com/ada.jpg" in html
    assert "First programmer" in html
    assert "Analyst at Analytical Engine Co" in html
    assert "London, United Kingdom" in html
    for section in ("summary", "experiences", "education", "skills", "projects"):
        assert f'id="{section}"' in html
    assert "1842-06 to 1843-09" in html
    assert "1830 to Present" in html
    assert "Mathematics, Logic" in html
    assert "https://example.com/note-g" in html
    assert list(upstream.requests[0].url.params.multi_items())[0] == ("url", PROFILE_URL)


def test_omits_absent_and_empty_sections(client, upstream):
    upstream.respond(
        200,
        json={"full_name": "Grace Hopper", "experiences": [], "skills": None, "education": "n/a"},
    )

    response = client.get("/", params={"url": PROFILE_URL})

    html = response.text
    assert response.status_code == 200
    assert "Grace Hopper" in html
    assert 'class="headline"' not in html
    assert 'class="occupation"' not in html
    assert 'class="location"' not in html
    for section in ("summary", "experiences", "education", "skills", "projects"):
        assert f'id="{section}"' not in html


def test_avatar_falls_back_to_generated_image(client, upstream):
    upstream.respond(200, json={"full_name": "Grace Hopper"})

    response = client.get("/", params={"url": PROFILE_URL})

    assert "https://ui-avatars.com/api/?name=Grace%20Hopper" in response.text


def test_upstream_error_shows_banner(client, upstream):
    upstream.respond(404, json={"code": 404, "description": "Person not found", "name": "Not Found"})

    response = client.get("/", params={"url": PROFILE_URL})

    assert response.status_code == 404
    assert "Person not found" in response.text
    assert 'id="profile"' not in response.text


def test_connection_failure_shows_banner(client, upstream):
    upstream.fail_with(httpx.ConnectError("connection refused"))

    response = client.get("/", params={"url": PROFILE_URL})

    assert response.status_code == 502
    assert "Profile API request failed" in response.text


def test_profile_text_is_escaped(client, upstream):
    upstream.respond(200, json={"full_name": "<script>alert(1)</script>"})

    response = client.get("/", params={"url": PROFILE_URL})

    assert "<script>alert(1)</script>" not in response.text
    assert "&lt;script&gt;" in response.text


def test_javascript_project_url_renders_as_text(client, upstream):
    upstream.respond(
        200,
        json={
            "full_name": "Ada Lovelace",
            "accomplishment_projects": [{"title": "Trap", "url": "javascript:alert(document.cookie)"}],
        },
    )

    response = client.get("/", params={"url": PROFILE_URL})

    assert response.status_code == 200
    assert "javascript:" not in response.text
    assert "<strong>Trap</strong>" in response.text


def test_non_string_picture_uses_generated_avatar(client, upstream):
    upstream.respond(200, json={"full_name": "Ada", "profile_pic_url": 12345})

    response = client.get("/", params={"url": PROFILE_URL})

    assert response.status_code == 200
    assert "https://ui-avatars.com/api/?name=Ada" in response.text
