"""
Job opportunity CRUD and pipeline stage changes.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from app.auth.verify import current_user_id
from app.db.mongo import get_database
from app.models.api.opportunity_request import OpportunityCreate, OpportunityPatch, StageUpdate
from app.models.domain.opportunity_domain import JobOpportunity
from app.services.job_opportunity_service import JobOpportunityService

router = APIRouter(prefix="/opportunities", tags=["opportunities"])


@router.get("", response_model=list[JobOpportunity])
async def list_opportunities(
    stage: str | None = Query(default=None),
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await JobOpportunityService(db).list(user_id, stage)


@router.post("", response_model=JobOpportunity, status_code=status.HTTP_201_CREATED)
async def create_opportunity(
    body: OpportunityCreate,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await JobOpportunityService(db).create(user_id, body)


@router.get("/{opportunity_id}", response_model=JobOpportunity)
async def get_opportunity(
    opportunity_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await JobOpportunityService(db).get(user_id, opportunity_id)


@router.put("/{opportunity_id}", response_model=JobOpportunity)
async def update_opportunity(
    opportunity_id: str,
    body: OpportunityPatch,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await JobOpportunityService(db).update(user_id, opportunity_id, body)


@router.post("/{opportunity_id}/stage", response_model=JobOpportunity)
async def update_stage(
    opportunity_id: str,
    body: StageUpdate,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await JobOpportunityService(db).update_stage(
        user_id, opportunity_id, body.stage, body.notes
    )


@router.delete("/{opportunity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_opportunity(
    opportunity_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    await JobOpportunityService(db).delete(user_id, opportunity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
