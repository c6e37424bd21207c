"""API routes, mounted under /api."""

from fastapi import APIRouter

from app.api import auth, blog, events, health, images, members, pages, testimonials, upload

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(blog.router, prefix="/blog", tags=["blog"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(members.router, prefix="/members", tags=["members"])
router.include_router(testimonials.router, prefix="/testimonials", tags=["testimonials"])
router.include_router(pages.router, prefix="/pages", tags=["pages"])
router.include_router(upload.router, prefix="/upload", tags=["upload"])
router.include_router(images.router, prefix="/images", tags=["images"])
