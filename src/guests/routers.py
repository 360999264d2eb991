from fastapi import APIRouter

from .features.get_avatars.router import router as get_avatars_router
from .features.save_avatars.router import router as save_avatars_router
from .features.submit_rsvp.router import router as submit_rsvp_router
from .features.verify_name.router import router as verify_name_router
from .features.verify_rsvp.router import router as verify_rsvp_router

router = APIRouter()

router.include_router(verify_name_router)
router.include_router(submit_rsvp_router)
router.include_router(save_avatars_router)
router.include_router(get_avatars_router)
router.include_router(verify_rsvp_router)
