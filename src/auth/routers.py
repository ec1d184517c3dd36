from fastapi import APIRouter

from .features.account_profile.router import router as account_profile_router
from .features.change_password.router import router as change_password_router
from .features.refresh_session.router import router as refresh_session_router
from .features.signin.router import router as signin_router
from .features.signup.router import router as signup_router
from .features.verify_email.router import router as verify_email_router

router = APIRouter()

router.include_router(signup_router)
router.include_router(verify_email_router)
router.include_router(signin_router)
router.include_router(refresh_session_router)
router.include_router(account_profile_router)
router.include_router(change_password_router)
