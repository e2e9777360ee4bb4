from skateroom.schemas.auth import AuthResponse, AuthUser, SessionResponse, SignInRequest, SignUpRequest
from skateroom.schemas.gear import (
	CategoryBucket,
	ConditionStatus,
	DetailsStub,
	GearCategory,
	GearCreate,
	GearUpdate,
	GearView,
	GearWriteResult,
	UsageStatus,
)
from skateroom.schemas.profile import ProfileRead, ProfileResponse, ProfileStats, ProfileUpdate, Stance
from skateroom.schemas.skate_session import SkateSessionCreate, SkateSessionRead, SkateSessionUpdate

__all__ = [
	"AuthResponse",
	"AuthUser",
	"SessionResponse",
	"SignInRequest",
	"SignUpRequest",
	"CategoryBucket",
	"ConditionStatus",
	"DetailsStub",
	"GearCategory",
	"GearCreate",
	"GearUpdate",
	"GearView",
	"GearWriteResult",
	"UsageStatus",
	"ProfileRead",
	"ProfileResponse",
	"ProfileStats",
	"ProfileUpdate",
	"Stance",
	"SkateSessionCreate",
	"SkateSessionRead",
	"SkateSessionUpdate",
]
