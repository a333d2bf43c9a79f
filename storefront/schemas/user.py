"""User, token and auth request schemas."""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Authenticated customer profile.

    Unknown fields from the auth API (including the password hash some
    endpoints echo back) are dropped and never persisted.
    """

    id: str = Field(alias="_id")
    first_name: str = Field(alias="firstName", default="")
    last_name: str = Field(alias="lastName", default="")
    email: str | None = None
    phone: str = ""
    role: str | None = None
    is_block: bool = Field(alias="isBlock", default=False)
    total_spent: float = Field(alias="totalSpent", default=0)
    total_orders: int = Field(alias="totalOrders", default=0)
    wishlist: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class AuthTokens(BaseModel):
    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class LoginCredentials(BaseModel):
    phone: str
    password: str


class RegisterData(BaseModel):
    phone: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str | None = None
    password: str

    model_config = ConfigDict(populate_by_name=True)


class ResetPasswordCredentials(BaseModel):
    password: str
    reset_token: str = Field(alias="resetToken")

    model_config = ConfigDict(populate_by_name=True)


class VerificationCodeRequest(BaseModel):
    target: str


class VerifyCodeRequest(BaseModel):
    target: str | None = None
    code: str


class SessionSnapshot(BaseModel):
    """Persisted shape of the session slot."""

    user: User | None = None
    tokens: AuthTokens | None = None
    first_visit: bool = Field(alias="firstVisit", default=True)

    model_config = ConfigDict(populate_by_name=True)


class SessionResponse(BaseModel):
    """Public session view. Tokens are never echoed back."""

    user: User | None
    is_authenticated: bool = Field(alias="isAuthenticated")
    is_loading: bool = Field(alias="isLoading")
    error: str | None
    first_visit: bool = Field(alias="firstVisit")

    model_config = ConfigDict(populate_by_name=True)


class RedirectDecision(BaseModel):
    route: str | None


class ActionResponse(BaseModel):
    """Outcome of an auth action plus the resulting session view."""

    ok: bool
    session: SessionResponse
