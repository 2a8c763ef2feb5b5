# app/repositories/job_opportunity_repository.py
from app.models.domain.opportunity_domain import JobOpportunity
from app.repositories.base import OwnedRepository


class JobOpportunityRepository(OwnedRepository[JobOpportunity]):
    collection_name = "jobOpportunities"
    model = JobOpportunity
    entity_name = "Job opportunity"
