from fastapi import APIRouter

from devcred.api.auth.routes import router as auth_router
from devcred.api.github.routes import router as github_router
from devcred.api.grove.routes import router as grove_router
from devcred.api.metadata.routes import router as metadata_router
from devcred.api.nft_image.routes import router as nft_image_router

router = APIRouter()
router.include_router(metadata_router)
router.include_router(nft_image_router)
router.include_router(auth_router)
router.include_router(github_router)
router.include_router(grove_router)
