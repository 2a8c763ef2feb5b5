from pydantic import Field

from app.models.domain.base import DomainModel, ObjectIdStr, UTCDateTime


class LinkedInStatus(DomainModel):
    """Public view of the LinkedIn integration (no credentials)."""

    connected: bool = False
    expires_at: UTCDateTime | None = None
    linkedin_id: str | None = None
    profile_url: str | None = None
    ssi_score: int | None = None
    last_ssi_update: UTCDateTime | None = None


class LinkedInIntegration(LinkedInStatus):
    """Stored integration record; tokens are Credential Store blobs."""

    access_token: str | None = None
    refresh_token: str | None = None


class EmailNotification(DomainModel):
    enabled: bool = True
    address: str = ""


class DesktopNotification(DomainModel):
    enabled: bool = False
    subscription: dict | None = None


class AppointmentReminder(DomainModel):
    enabled: bool = True
    minutes_before: int = 60


class NotificationPreferences(DomainModel):
    email: EmailNotification = Field(default_factory=EmailNotification)
    desktop: DesktopNotification = Field(default_factory=DesktopNotification)
    appointment_reminder: AppointmentReminder = Field(default_factory=AppointmentReminder)


class UserProfile(DomainModel):
    """User as returned to clients: password hash and OAuth tokens stripped."""

    id: ObjectIdStr = Field(alias="_id")
    email: str
    name: str
    timezone: str = "UTC"
    bio: str = ""
    skills: list[str] = Field(default_factory=list)
    target_industries: list[str] = Field(default_factory=list)
    target_regions: list[str] = Field(default_factory=list)
    weekly_connection_limit: int = 100
    week_start_date: UTCDateTime | None = None
    linkedin_integration: LinkedInStatus = Field(default_factory=LinkedInStatus)
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)
    created_at: UTCDateTime
    updated_at: UTCDateTime


class UserRecord(UserProfile):
    """Full stored user document."""

    password_hash: str
    linkedin_integration: LinkedInIntegration = Field(default_factory=LinkedInIntegration)

    def to_profile(self) -> UserProfile:
        return UserProfile.model_validate(self.model_dump(exclude={"password_hash"}))
