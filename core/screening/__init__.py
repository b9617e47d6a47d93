from core.screening.dto import ScreeningDTO
from core.screening.service import ScreeningService

__all__ = ['ScreeningDTO', 'ScreeningService']
