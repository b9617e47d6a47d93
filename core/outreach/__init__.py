from core.outreach.service import BulkSendReport, OutreachService, SendReceipt

__all__ = ['BulkSendReport', 'OutreachService', 'SendReceipt']
