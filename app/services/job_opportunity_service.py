# app/services/job_opportunity_service.py
"""
Job opportunities and their stage pipeline.

Every stage change appends to ``stageHistory`` in the same update that sets
``stage``, so concurrent changes can race on the scalar but never lose a
history entry. Jumps outside STAGE_TRANSITIONS are applied anyway (manual
corrections), flagged ``forced`` in the history and logged.
"""

from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from app.db.helpers import to_object_id
from app.infrastructure.observability.logging import get_logger
from app.models.api.opportunity_request import OpportunityCreate, OpportunityPatch
from app.models.domain.opportunity_domain import (
    JobOpportunity,
    JobStage,
    StageHistoryEntry,
    is_regular_transition,
)
from app.repositories.base import utcnow
from app.repositories.job_opportunity_repository import JobOpportunityRepository
from app.utils.errors import ValidationError
from app.utils.validation import is_valid_email, validate_enum, validate_string_length

logger = get_logger(__name__)


def _validate_fields(fields: dict) -> None:
    if "company" in fields:
        validate_string_length("Company", fields["company"], min_length=1, max_length=200)
    if "position" in fields:
        validate_string_length("Position", fields["position"], min_length=1, max_length=200)
    if fields.get("contact_email") and not is_valid_email(fields["contact_email"]):
        raise ValidationError("Invalid contact email format")
    salary = fields.get("salary")
    if salary is not None and salary["min"] > salary["max"]:
        raise ValidationError("Salary minimum must not exceed maximum")


class JobOpportunityService:
    def __init__(self, db: AsyncDatabase):
        self.opportunities = JobOpportunityRepository(db)

    async def create(self, user_id: str, data: OpportunityCreate) -> JobOpportunity:
        fields = data.model_dump()
        _validate_fields(fields)
        fields["recruiter_id"] = (
            to_object_id(data.recruiter_id, "Recruiter") if data.recruiter_id else None
        )

        now = utcnow()
        opportunity = await self.opportunities.insert(
            user_id,
            {
                **fields,
                "stage": JobStage.INITIAL_CONTACTS,
                "stage_history": [StageHistoryEntry(stage=JobStage.INITIAL_CONTACTS, timestamp=now)],
                "attachments": [],
            },
        )
        logger.info("Job opportunity created", user_id=user_id, opportunity_id=opportunity.id)
        return opportunity

    async def list(self, user_id: str, stage: str | None = None) -> list[JobOpportunity]:
        filters = {}
        if stage:
            filters["stage"] = validate_enum("stage", stage, JobStage).value
        return await self.opportunities.list_owned(
            user_id, filters, sort=[("createdAt", DESCENDING)]
        )

    async def get(self, user_id: str, opportunity_id: str) -> JobOpportunity:
        return await self.opportunities.find_owned(user_id, opportunity_id)

    async def update(
        self, user_id: str, opportunity_id: str, patch: OpportunityPatch
    ) -> JobOpportunity:
        fields = patch.changes()
        _validate_fields(fields)
        return await self.opportunities.update_owned(user_id, opportunity_id, fields)

    async def update_stage(
        self, user_id: str, opportunity_id: str, new_stage: str, notes: str | None = None
    ) -> JobOpportunity:
        target = validate_enum("stage", new_stage, JobStage)
        current = await self.opportunities.find_owned(user_id, opportunity_id)

        forced = not is_regular_transition(current.stage, target)
        if forced:
            logger.warning(
                "Forced job stage transition",
                user_id=user_id,
                opportunity_id=opportunity_id,
                from_stage=current.stage.value,
                to_stage=target.value,
            )

        entry = StageHistoryEntry(stage=target, timestamp=utcnow(), notes=notes, forced=forced)
        opportunity = await self.opportunities.update_owned(
            user_id,
            opportunity_id,
            {"stage": target},
            push={"stage_history": entry},
        )

        logger.info(
            "Job stage updated",
            user_id=user_id,
            opportunity_id=opportunity_id,
            stage=target.value,
            history_length=len(opportunity.stage_history),
        )
        return opportunity

    async def delete(self, user_id: str, opportunity_id: str) -> None:
        await self.opportunities.delete_owned(user_id, opportunity_id)
        logger.info("Job opportunity deleted", user_id=user_id, opportunity_id=opportunity_id)
