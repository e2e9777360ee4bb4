from skateroom.models.auth_session import AuthSession
from skateroom.models.gear import SkateGear
from skateroom.models.gear_details import (
	BearingDetail,
	DeckDetail,
	GriptapeDetail,
	ToolDetail,
	TruckDetail,
	WheelDetail,
)
from skateroom.models.profile import Profile
from skateroom.models.skate_session import SkateSession
from skateroom.models.user import User

__all__ = [
	"AuthSession",
	"BearingDetail",
	"DeckDetail",
	"GriptapeDetail",
	"Profile",
	"SkateGear",
	"SkateSession",
	"ToolDetail",
	"TruckDetail",
	"User",
	"WheelDetail",
]
