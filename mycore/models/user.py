"""
Pydantic models for user profiles, onboarding and auth requests
"""
from pydantic import BaseModel, Field
from typing import List, Optional

from mycore.models.habit import Habit, InterestType


class UserSettings(BaseModel):
    location_enabled: bool = False
    notifications_enabled: bool = False
    screen_time_enabled: bool = False


class User(BaseModel):
    """Account profile"""
    id: str
    email: str
    name: str
    onboarded: bool = False
    interests: List[InterestType] = Field(default_factory=list)
    settings: UserSettings = Field(default_factory=UserSettings)


class Permissions(BaseModel):
    """Permissions granted during onboarding"""
    loc: bool = False
    notif: bool = False
    screen: bool = False

    def to_settings(self) -> UserSettings:
        return UserSettings(
            location_enabled=self.loc,
            notifications_enabled=self.notif,
            screen_time_enabled=self.screen
        )


class AuthIdentity(BaseModel):
    """Stable identity returned by the authentication collaborator"""
    id: str
    email: str
    name: Optional[str] = None


class InitUserRequest(BaseModel):
    email: str = Field(..., min_length=3)
    name: str = Field("User", min_length=1, max_length=100)


class OnboardingRequest(BaseModel):
    """Request model for completing onboarding"""
    interests: List[InterestType] = Field(default_factory=list)
    habits: List[Habit] = Field(default_factory=list)
    permissions: Permissions = Field(default_factory=Permissions)


class CredentialsRequest(BaseModel):
    """Request model for email/password login and signup"""
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
