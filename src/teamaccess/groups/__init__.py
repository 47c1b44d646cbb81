"""Facebook groups owned by accounts."""

from teamaccess.groups.models import FacebookGroup
from teamaccess.groups.service import FacebookGroupError, FacebookGroupService, facebook_group_service

__all__ = ["FacebookGroup", "FacebookGroupError", "FacebookGroupService", "facebook_group_service"]
