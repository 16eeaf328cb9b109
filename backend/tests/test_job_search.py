from __future__ import annotations

from datetime import datetime, timedelta

from autoapply.services.job_search import JobFilters, date_posted_cutoff, search_jobs

NOW = datetime(2024, 6, 15, 12, 0, 0)


def test_date_posted_cutoff_windows():
    assert date_posted_cutoff("day", NOW) == NOW - timedelta(days=1)
    assert date_posted_cutoff("week", NOW) == NOW - timedelta(days=7)
    assert date_posted_cutoff("month", NOW) == NOW - timedelta(days=30)
    assert date_posted_cutoff("year", NOW) is None
    assert date_posted_cutoff(None, NOW) is None


def test_week_window_keeps_recent_jobs(db_session, make_job):
    make_job(title="Yesterday", posted_days_ago=1, now=NOW)
    make_job(title="Fresh", posted_days_ago=2, now=NOW)
    make_job(title="Edge", posted_days_ago=7, now=NOW)
    make_job(title="Stale", posted_days_ago=8, now=NOW)

    jobs = search_jobs(db_session, JobFilters(date_posted="week"), now=NOW)
    assert [job.title for job in jobs] == ["Yesterday", "Fresh", "Edge"]

    unbounded = search_jobs(db_session, JobFilters(date_posted="fortnight"), now=NOW)
    assert len(unbounded) == 4


def test_text_filters_are_case_insensitive_substrings(db_session, make_job):
    make_job(title="Senior React Developer", location="San Francisco, CA")
    make_job(title="Data Scientist", location="New York, NY")

    jobs = search_jobs(db_session, JobFilters(title="react"))
    assert [job.title for job in jobs] == ["Senior React Developer"]

    jobs = search_jobs(db_session, JobFilters(location="new york"))
    assert [job.title for job in jobs] == ["Data Scientist"]


def test_exact_filters_and_easy_apply(db_session, make_job):
    make_job(title="A", experience_level="senior", job_type="contract", is_easy_apply=False)
    make_job(title="B", experience_level="senior", job_type="full_time")
    make_job(title="C", experience_level="mid", job_type="full_time")

    jobs = search_jobs(db_session, JobFilters(experience_level="senior", job_type="full_time"))
    assert [job.title for job in jobs] == ["B"]

    jobs = search_jobs(db_session, JobFilters(is_easy_apply=False))
    assert [job.title for job in jobs] == ["A"]


def test_keywords_match_title_or_description(db_session, make_job):
    make_job(title="Frontend Engineer", description="Build UIs")
    make_job(title="Platform Engineer", description="Kubernetes and Go")
    make_job(title="Accountant", description="Ledgers")

    jobs = search_jobs(db_session, JobFilters(keywords=["frontend", "kubernetes"]))
    assert sorted(job.title for job in jobs) == ["Frontend Engineer", "Platform Engineer"]


def test_results_are_newest_first_and_paginated(db_session, make_job):
    for days in (5, 1, 3):
        make_job(title=f"job-{days}", posted_days_ago=days, now=NOW)

    first = search_jobs(db_session, JobFilters(), page=1, limit=2, now=NOW)
    second = search_jobs(db_session, JobFilters(), page=2, limit=2, now=NOW)
    assert [job.title for job in first] == ["job-1", "job-3"]
    assert [job.title for job in second] == ["job-5"]


def test_jobs_api_returns_company_and_camel_case(client, make_company, make_job):
    company = make_company(name="Stripe", website="https://stripe.com")
    make_job(title="Full Stack Engineer", company_id=company.id, skills=["React"])
    make_job(title="Orphan Posting")

    response = client.get("/api/jobs", params={"title": "engineer", "isEasyApply": "true"})
    assert response.status_code == 200
    [job] = response.json()
    assert job["isEasyApply"] is True
    assert job["company"]["name"] == "Stripe"
    assert job["skills"] == ["React"]

    [orphan] = client.get("/api/jobs", params={"title": "orphan"}).json()
    assert orphan["company"] is None


def test_jobs_api_validates_paging(client):
    assert client.get("/api/jobs", params={"limit": 0}).status_code == 400
    assert client.get("/api/jobs", params={"limit": 101}).status_code == 400
    assert client.get("/api/jobs", params={"page": 0}).status_code == 400
    assert client.get("/api/jobs", params={"experienceLevel": "wizard"}).status_code == 400


def test_get_job(client, make_job):
    job = make_job(title="Site Reliability Engineer")

    response = client.get(f"/api/jobs/{job.id}")
    assert response.status_code == 200
    assert response.json()["title"] == "Site Reliability Engineer"

    missing = client.get("/api/jobs/9999")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Job not found"
