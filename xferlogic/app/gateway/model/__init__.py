from xferlogic.app.gateway.model.usage_record import UsageRecord
from xferlogic.app.gateway.model.user import User

__all__ = ['User', 'UsageRecord']
