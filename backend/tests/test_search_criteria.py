from conftest import register


def _criteria(**overrides):
    payload = {
        "title": "Frontend Developer Search",
        "keywords": ["Frontend", "React"],
        "location": "Remote",
        "experienceLevel": "senior",
        "jobType": "full_time",
        "datePosted": "week",
        "autoApply": False,
    }
    payload.update(overrides)
    return payload


def test_crud_round(auth_client):
    response = auth_client.post("/api/search-criteria", json=_criteria())
    assert response.status_code == 201
    created = response.json()
    assert created["experienceLevel"] == "senior"
    assert created["keywords"] == ["Frontend", "React"]

    fetched = auth_client.get(f"/api/search-criteria/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Frontend Developer Search"

    updated = auth_client.put(f"/api/search-criteria/{created['id']}", json={"autoApply": True, "location": "Berlin"})
    assert updated.status_code == 200
    assert updated.json()["autoApply"] is True
    assert updated.json()["location"] == "Berlin"
    assert updated.json()["title"] == "Frontend Developer Search"

    assert [item["id"] for item in auth_client.get("/api/search-criteria").json()] == [created["id"]]

    deleted = auth_client.delete(f"/api/search-criteria/{created['id']}")
    assert deleted.json() == {"message": "Search criteria deleted successfully"}
    assert auth_client.get("/api/search-criteria").json() == []


def test_rejects_unknown_enum_values(auth_client):
    assert auth_client.post("/api/search-criteria", json=_criteria(datePosted="year")).status_code == 400
    assert auth_client.post("/api/search-criteria", json=_criteria(jobType="gig")).status_code == 400


def test_ownership(auth_client, make_client):
    created = auth_client.post("/api/search-criteria", json=_criteria()).json()

    other = make_client()
    register(other, username="bob")
    assert other.put(f"/api/search-criteria/{created['id']}", json={"title": "Hijack"}).status_code == 403
    assert other.get(f"/api/search-criteria/{created['id']}").status_code == 403
    assert other.get("/api/search-criteria/9999").status_code == 404
    assert other.delete(f"/api/search-criteria/{created['id']}").status_code == 403
    assert other.post(f"/api/search-criteria/{created['id']}/run").status_code == 403
    assert other.delete("/api/search-criteria/9999").status_code == 404
    assert other.get("/api/search-criteria").json() == []


def test_run_without_auto_apply_only_searches(auth_client, make_job):
    make_job(title="Senior Frontend Developer", experience_level="senior", location="Remote (US)")
    make_job(title="Backend Developer", experience_level="senior", location="Remote (US)")
    created = auth_client.post("/api/search-criteria", json=_criteria()).json()

    response = auth_client.post(f"/api/search-criteria/{created['id']}/run")

    assert response.status_code == 200
    body = response.json()
    assert [job["title"] for job in body["jobs"]] == ["Senior Frontend Developer"]
    assert body["results"] == []
    assert auth_client.get("/api/applications").json() == []


def test_run_with_auto_apply_applies_to_easy_apply_matches(auth_client, make_job):
    easy = make_job(title="React Engineer", experience_level="senior")
    make_job(title="React Lead", experience_level="senior", is_easy_apply=False)
    auth_client.post("/api/apply", json={"jobId": easy.id})
    fresh = make_job(title="Frontend Engineer", experience_level="senior")
    created = auth_client.post("/api/search-criteria", json=_criteria(autoApply=True)).json()

    body = auth_client.post(f"/api/search-criteria/{created['id']}/run").json()

    assert sorted(job["title"] for job in body["jobs"]) == ["Frontend Engineer", "React Engineer"]
    outcomes = {item["jobId"]: (item["success"], item["message"]) for item in body["results"]}
    assert outcomes == {fresh.id: (True, None), easy.id: (False, "Already applied")}
