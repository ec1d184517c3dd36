SIGNUP_URL = "/api/auth/signup"
VERIFY_EMAIL_URL = "/api/auth/verify-email"
SIGNIN_URL = "/api/auth/signin"
REFRESH_SESSION_URL = "/api/auth/refresh-session"
ACCOUNT_PROFILE_URL = "/api/user-management/account/profile"
USER_PROFILE_URL = "/api/user-management/users/{user_id}/update-userprofile"
CHANGE_PASSWORD_URL = "/api/user-management/users/{user_id}/change-password"
