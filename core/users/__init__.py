from core.users.service import UserDTO, UserService

__all__ = ['UserDTO', 'UserService']
