from core.applications.dto import ApplicationDTO, ApplicationReceipt, ApprovalResult, ScoringOutcome
from core.applications.orchestrator import ApplicationScoringOrchestrator
from core.applications.service import ApplicationService

__all__ = [
    'ApplicationService', 'ApplicationScoringOrchestrator',
    'ApplicationDTO', 'ApplicationReceipt', 'ApprovalResult', 'ScoringOutcome',
]
