"""
Test job opportunity creation and the stage pipeline.
"""

import pytest

from app.models.api.opportunity_request import OpportunityCreate, OpportunityPatch
from app.models.domain.opportunity_domain import JobStage, Salary, is_regular_transition
from app.services.job_opportunity_service import JobOpportunityService
from app.utils.errors import NotFoundError, ValidationError

USER_ID = "65f1c0ffee00000000000001"
OTHER_USER_ID = "65f1c0ffee00000000000002"


def test_transition_table():
    assert is_regular_transition(JobStage.INITIAL_CONTACTS, JobStage.IN_PROGRESS)
    assert is_regular_transition(JobStage.INTERVIEW, JobStage.IN_PROGRESS)
    assert is_regular_transition(JobStage.PROPOSAL, JobStage.ARCHIVED)
    assert is_regular_transition(JobStage.ARCHIVED, JobStage.NEGOTIATION)
    assert not is_regular_transition(JobStage.INITIAL_CONTACTS, JobStage.DEAL_CLOSED)
    assert not is_regular_transition(JobStage.INITIAL_CONTACTS, JobStage.INTERVIEW)


@pytest.mark.asyncio
async def test_create_starts_in_initial_contacts(db):
    service = JobOpportunityService(db)

    opportunity = await service.create(USER_ID, OpportunityCreate(company="Acme", position="Engineer"))

    assert opportunity.stage == JobStage.INITIAL_CONTACTS
    assert len(opportunity.stage_history) == 1
    assert opportunity.stage_history[0].stage == JobStage.INITIAL_CONTACTS
    assert opportunity.attachments == []


@pytest.mark.asyncio
async def test_stage_change_appends_history(db):
    service = JobOpportunityService(db)
    created = await service.create(USER_ID, OpportunityCreate(company="Acme", position="Engineer"))

    updated = await service.update_stage(USER_ID, created.id, "in_progress", "phone screen done")

    assert updated.stage == JobStage.IN_PROGRESS
    assert len(updated.stage_history) == 2
    last = updated.stage_history[-1]
    assert last.stage == JobStage.IN_PROGRESS
    assert last.notes == "phone screen done"
    assert last.forced is False
    assert last.timestamp >= updated.stage_history[0].timestamp

    fetched = await service.get(USER_ID, created.id)
    assert [entry.stage for entry in fetched.stage_history] == [
        JobStage.INITIAL_CONTACTS,
        JobStage.IN_PROGRESS,
    ]


@pytest.mark.asyncio
async def test_stage_jump_is_applied_and_flagged(db):
    service = JobOpportunityService(db)
    created = await service.create(USER_ID, OpportunityCreate(company="Acme", position="Engineer"))

    updated = await service.update_stage(USER_ID, created.id, "deal_closed")

    assert updated.stage == JobStage.DEAL_CLOSED
    assert updated.stage_history[-1].forced is True


@pytest.mark.asyncio
async def test_unknown_stage_rejected(db):
    service = JobOpportunityService(db)
    created = await service.create(USER_ID, OpportunityCreate(company="Acme", position="Engineer"))

    with pytest.raises(ValidationError):
        await service.update_stage(USER_ID, created.id, "hired")

    fetched = await service.get(USER_ID, created.id)
    assert len(fetched.stage_history) == 1


@pytest.mark.asyncio
async def test_other_users_opportunity_not_found(db):
    service = JobOpportunityService(db)
    created = await service.create(USER_ID, OpportunityCreate(company="Acme", position="Engineer"))

    with pytest.raises(NotFoundError):
        await service.get(OTHER_USER_ID, created.id)
    with pytest.raises(NotFoundError):
        await service.update_stage(OTHER_USER_ID, created.id, "in_progress")
    with pytest.raises(NotFoundError):
        await service.delete(OTHER_USER_ID, created.id)


@pytest.mark.asyncio
async def test_malformed_id_is_not_found(db):
    with pytest.raises(NotFoundError):
        await JobOpportunityService(db).get(USER_ID, "not-an-object-id")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"company": "", "position": "Engineer"},
        {"company": "Acme", "position": "x" * 201},
        {"company": "Acme", "position": "Engineer", "contact_email": "nope"},
        {"company": "Acme", "position": "Engineer", "salary": Salary(min=200, max=100)},
    ],
)
async def test_create_validation(db, payload):
    with pytest.raises(ValidationError):
        await JobOpportunityService(db).create(USER_ID, OpportunityCreate(**payload))


@pytest.mark.asyncio
async def test_list_filters_by_stage(db):
    service = JobOpportunityService(db)
    first = await service.create(USER_ID, OpportunityCreate(company="Acme", position="Engineer"))
    await service.create(USER_ID, OpportunityCreate(company="Globex", position="Lead"))
    await service.update_stage(USER_ID, first.id, "in_progress")

    in_progress = await service.list(USER_ID, "in_progress")

    assert [item.company for item in in_progress] == ["Acme"]
    assert len(await service.list(USER_ID)) == 2
    assert await service.list(OTHER_USER_ID) == []


@pytest.mark.asyncio
async def test_update_patch_keeps_stage(db):
    service = JobOpportunityService(db)
    created = await service.create(USER_ID, OpportunityCreate(company="Acme", position="Engineer"))

    updated = await service.update(
        USER_ID, created.id, OpportunityPatch(notes="Referral from Bob", remote_type="remote")
    )

    assert updated.notes == "Referral from Bob"
    assert updated.remote_type == "remote"
    assert updated.stage == JobStage.INITIAL_CONTACTS
    assert updated.company == "Acme"
