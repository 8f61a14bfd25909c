from models import CandidateModel, PracticeInterviewModel, RunModel
from models.DB_schemas.run import Run
from conftest import build_candidate


async def test_detached_models_read_empty_and_skip_writes():
    run_model = await RunModel.create_instance(None)
    run = Run(job_description="Backend engineer", total=1)

    assert run_model.detached
    assert await run_model.create_run(run) is run
    assert await run_model.get_run_by_id(run.id) is None
    assert await run_model.get_recent_runs() == []
    assert await run_model.count_documents() == 0


async def test_ids_are_server_issued_strings(fake_db, settings):
    run_model = await RunModel.create_instance(fake_db)
    first = await run_model.create_run(Run(job_description="Backend engineer"))
    second = await run_model.create_run(Run(job_description="Backend engineer"))

    assert isinstance(first.id, str) and len(first.id) == 24
    assert first.id != second.id
    stored = fake_db[settings.RUNS_COLLECTION].documents
    assert [doc["_id"] for doc in stored] == [first.id, second.id]


async def test_candidates_newest_first_and_filtered(fake_db):
    model = await CandidateModel.create_instance(fake_db)
    await model.create_candidate(build_candidate(created_at="2025-01-01T00:00:00+00:00"))
    await model.create_candidate(build_candidate(
        created_at="2025-01-03T00:00:00+00:00", shortlisted=False, recommended="no"
    ))
    await model.create_candidate(build_candidate(run_id="run-2", created_at="2025-01-02T00:00:00+00:00"))

    everyone = await model.get_candidates()
    assert [c.created_at[:10] for c in everyone] == ["2025-01-03", "2025-01-02", "2025-01-01"]
    assert len(await model.get_candidates(run_id="run-1")) == 2
    assert len(await model.get_candidates(shortlisted=False)) == 1


async def test_candidate_lookup_by_email_is_case_insensitive(fake_db):
    model = await CandidateModel.create_instance(fake_db)
    candidate = await model.create_candidate(build_candidate(email="Ada@Example.com"))

    found = await model.get_candidate_by_email("ADA@example.com ")
    assert found.id == candidate.id


async def test_missing_index_falls_back_to_in_memory_sort(fake_db, settings):
    collection = fake_db[settings.PRACTICE_INTERVIEWS_COLLECTION]
    for day, user, finalized in (("01", "u1", True), ("03", "u2", True), ("02", "u3", True), ("04", "u4", False)):
        collection.documents.append({
            "_id": f"p{day}",
            "role": "Backend Engineer",
            "user_id": user,
            "finalized": finalized,
            "created_at": f"2025-01-{day}T00:00:00+00:00",
        })

    # built without init_collection, so the hinted index does not exist
    model = PracticeInterviewModel(fake_db)
    latest = await model.get_latest("u1", limit=5)
    assert [interview.id for interview in latest] == ["p03", "p02"]

    mine = await model.get_by_user("u2")
    assert [interview.id for interview in mine] == ["p03"]
