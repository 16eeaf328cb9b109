from datetime import datetime, timedelta

import pytest
from conftest import register

from autoapply.models import ApplicationStatus, JobApplication, User
from autoapply.services.applications import AlreadyAppliedError, _submit, apply_to_job


def test_apply_uses_default_resume(auth_client, make_job):
    job = make_job()
    resume = auth_client.post("/api/resumes", json={"title": "Main", "content": "cv", "isDefault": True}).json()

    response = auth_client.post("/api/apply", json={"jobId": job.id, "notes": "Easy apply"})

    assert response.status_code == 201
    body = response.json()
    assert body["jobId"] == job.id
    assert body["resumeId"] == resume["id"]
    assert body["status"] == "applied"
    assert body["notes"] == "Easy apply"


def test_apply_without_any_resume(auth_client, make_job):
    job = make_job()
    body = auth_client.post("/api/apply", json={"jobId": job.id}).json()
    assert body["resumeId"] is None


def test_apply_twice_conflicts(auth_client, make_job):
    job = make_job()
    assert auth_client.post("/api/apply", json={"jobId": job.id}).status_code == 201

    response = auth_client.post("/api/apply", json={"jobId": job.id})
    assert response.status_code == 409
    assert response.json()["detail"] == "You have already applied to this job"

    response = auth_client.post("/api/applications", json={"jobId": job.id, "status": "viewed"})
    assert response.status_code == 409


def test_apply_to_missing_job(auth_client):
    response = auth_client.post("/api/apply", json={"jobId": 424242})
    assert response.status_code == 404
    assert response.json()["detail"] == "Job not found"


def test_apply_with_someone_elses_resume(auth_client, make_client, make_job):
    job = make_job()
    resume = auth_client.post("/api/resumes", json={"title": "Mine", "content": "cv"}).json()

    other = make_client()
    register(other, username="bob")
    assert other.post("/api/apply", json={"jobId": job.id, "resumeId": resume["id"]}).status_code == 403
    assert other.post("/api/apply", json={"jobId": job.id, "resumeId": 9999}).status_code == 404


def test_batch_apply_reports_each_job(auth_client, make_job):
    first = make_job(title="First")
    second = make_job(title="Second")
    auth_client.post("/api/apply", json={"jobId": second.id})

    response = auth_client.post("/api/apply-batch", json={"jobIds": [first.id, second.id, 777, first.id]})

    assert response.status_code == 201
    results = response.json()["results"]
    assert [(item["jobId"], item["success"], item["message"]) for item in results] == [
        (first.id, True, None),
        (second.id, False, "Already applied"),
        (777, False, "Job not found"),
        (first.id, False, "Already applied"),
    ]
    assert results[0]["applicationId"] is not None

    applications = auth_client.get("/api/applications").json()
    batch_notes = [item["application"]["notes"] for item in applications if item["job"]["id"] == first.id]
    assert batch_notes == ["Applied via batch auto-apply"]


def test_batch_apply_rejects_empty_list(auth_client):
    assert auth_client.post("/api/apply-batch", json={"jobIds": []}).status_code == 400


def test_create_application_with_status(auth_client, make_company, make_job):
    company = make_company(name="Spotify")
    job = make_job(company_id=company.id)

    response = auth_client.post("/api/applications", json={"jobId": job.id, "status": "in_review"})
    assert response.status_code == 201
    application_id = response.json()["id"]

    detail = auth_client.get(f"/api/applications/{application_id}").json()
    assert detail["application"]["status"] == "in_review"
    assert detail["job"]["id"] == job.id
    assert detail["company"]["name"] == "Spotify"


def test_update_status_refreshes_timestamp(auth_client, make_job, db_session):
    job = make_job()
    application_id = auth_client.post("/api/apply", json={"jobId": job.id}).json()["id"]
    earlier = datetime.utcnow() - timedelta(days=3)
    db_session.query(JobApplication).update({JobApplication.last_status_update: earlier})
    db_session.commit()

    response = auth_client.put(f"/api/applications/{application_id}", json={"notes": "Followed up"})
    assert response.json()["notes"] == "Followed up"
    assert datetime.fromisoformat(response.json()["lastStatusUpdate"]) < datetime.utcnow() - timedelta(days=2)

    response = auth_client.put(f"/api/applications/{application_id}", json={"status": "rejected"})
    body = response.json()
    assert body["status"] == "rejected"
    assert datetime.fromisoformat(body["lastStatusUpdate"]) > earlier

    # Any status may follow any other.
    response = auth_client.put(f"/api/applications/{application_id}", json={"status": "applied"})
    assert response.json()["status"] == "applied"


def test_update_rejects_unknown_status_and_foreign_resume(auth_client, make_client, make_job):
    job = make_job()
    application_id = auth_client.post("/api/apply", json={"jobId": job.id}).json()["id"]
    assert auth_client.put(f"/api/applications/{application_id}", json={"status": "ghosted"}).status_code == 400

    other = make_client()
    register(other, username="bob")
    foreign = other.post("/api/resumes", json={"title": "Bob CV", "content": "cv"}).json()
    response = auth_client.put(f"/api/applications/{application_id}", json={"resumeId": foreign["id"]})
    assert response.status_code == 403

    response = other.put(f"/api/applications/{application_id}", json={"status": "viewed"})
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized to update this application"
    assert other.get(f"/api/applications/{application_id}").status_code == 403
    assert other.get("/api/applications/123456").status_code == 404


def test_list_filters_by_status_and_recent_limit(auth_client, make_job):
    jobs = [make_job(title=f"Job {index}") for index in range(4)]
    for job in jobs:
        auth_client.post("/api/apply", json={"jobId": job.id})
    auth_client.post("/api/applications", json={"jobId": make_job(title="Interview").id, "status": "interview_scheduled"})

    everything = auth_client.get("/api/applications").json()
    assert len(everything) == 5

    interviews = auth_client.get("/api/applications", params={"status": "interview_scheduled"}).json()
    assert [item["job"]["title"] for item in interviews] == ["Interview"]

    recent = auth_client.get("/api/applications/recent", params={"limit": 2}).json()
    assert [item["job"]["title"] for item in recent] == ["Interview", "Job 3"]
    assert len(auth_client.get("/api/applications/recent").json()) == 5


def test_stats_without_applications(auth_client):
    assert auth_client.get("/api/stats").json() == {
        "totalApplications": 0,
        "responsesReceived": 0,
        "interviewsScheduled": 0,
        "successRate": 0,
    }


def test_stats_counts_and_rounds_half_up(auth_client, make_job):
    statuses = ["interview_scheduled", "viewed", "rejected", "applied", "no_response", "applied", "applied", "applied"]
    for index, status in enumerate(statuses):
        job = make_job(title=f"Job {index}")
        auth_client.post("/api/applications", json={"jobId": job.id, "status": status})

    assert auth_client.get("/api/stats").json() == {
        "totalApplications": 8,
        "responsesReceived": 3,
        "interviewsScheduled": 1,
        "successRate": 13,
    }


def test_batch_apply_with_unusable_resume_reports_every_job(auth_client, make_client, make_job):
    first = make_job(title="First")
    second = make_job(title="Second")
    other = make_client()
    register(other, username="bob")
    foreign = other.post("/api/resumes", json={"title": "Bob CV", "content": "cv"}).json()

    response = auth_client.post("/api/apply-batch", json={"jobIds": [first.id, second.id], "resumeId": foreign["id"]})
    assert response.status_code == 201
    assert [(item["jobId"], item["success"], item["message"]) for item in response.json()["results"]] == [
        (first.id, False, "Not authorized to use this resume"),
        (second.id, False, "Not authorized to use this resume"),
    ]

    response = auth_client.post("/api/apply-batch", json={"jobIds": [first.id, second.id], "resumeId": 99999})
    assert response.status_code == 201
    assert {item["message"] for item in response.json()["results"]} == {"Resume not found"}
    assert not any(item["success"] for item in response.json()["results"])

    assert auth_client.get("/api/applications").json() == []


def test_unique_constraint_reports_already_applied(db_session, make_job):
    user = User(username="frank", password_hash="x", email="frank@example.com", full_name="Frank")
    db_session.add(user)
    db_session.commit()
    job = make_job()
    apply_to_job(db_session, user, job.id)

    # Skips the up-front lookup, as a concurrent request would.
    with pytest.raises(AlreadyAppliedError):
        _submit(db_session, user, job.id, None, None, ApplicationStatus.APPLIED)

    assert db_session.query(JobApplication).filter(JobApplication.job_id == job.id).count() == 1
