import logging
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from tortoise.exceptions import BaseORMException

from helpers.admin_auth import require_admin
from helpers.errors import NotFound, StorageFailure
from models.content import Blog, Service, Testimonial


logger = logging.getLogger(__name__)

content_router = APIRouter()


class ServicePayload(BaseModel):
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    published: bool = True


class BlogPayload(BaseModel):
    title: str
    summary: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    published: bool = False


class TestimonialPayload(BaseModel):
    name: str
    text: str
    image: Optional[str] = None
    rating: int = 5
    published: bool = False


def service_to_dict(s: Service) -> dict:
    return {
        "id": s.id,
        "title": s.title,
        "description": s.description,
        "icon": s.icon,
        "published": s.published,
        "createdAt": s.created_at.isoformat() if s.created_at else None,
    }


def blog_to_dict(b: Blog) -> dict:
    return {
        "id": b.id,
        "title": b.title,
        "summary": b.summary,
        "content": b.content,
        "image": b.image,
        "published": b.published,
        "createdAt": b.created_at.isoformat() if b.created_at else None,
    }


def testimonial_to_dict(t: Testimonial) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "text": t.text,
        "image": t.image,
        "rating": t.rating,
        "published": t.published,
        "createdAt": t.created_at.isoformat() if t.created_at else None,
    }


async def _published(model, to_dict):
    try:
        items = await model.filter(published=True).order_by("-created_at", "-id")
        return [to_dict(item) for item in items]
    except BaseORMException as e:
        logger.exception(f"Failed to fetch {model.__name__}: {e}")
        raise StorageFailure(f"Failed to fetch {model.__name__.lower()}s")


async def _create(model, payload: BaseModel, to_dict):
    try:
        item = await model.create(**payload.model_dump())
        return to_dict(item)
    except BaseORMException as e:
        logger.exception(f"Failed to create {model.__name__}: {e}")
        raise StorageFailure(f"Failed to create {model.__name__.lower()}")


@content_router.get("/services")
async def list_services():
    return await _published(Service, service_to_dict)


@content_router.get("/blogs")
async def list_blogs():
    return await _published(Blog, blog_to_dict)


@content_router.get("/testimonials")
async def list_testimonials():
    return await _published(Testimonial, testimonial_to_dict)


@content_router.post("/services", dependencies=[Depends(require_admin)])
async def create_service(payload: ServicePayload):
    return await _create(Service, payload, service_to_dict)


@content_router.post("/blogs", dependencies=[Depends(require_admin)])
async def create_blog(payload: BlogPayload):
    return await _create(Blog, payload, blog_to_dict)


@content_router.post("/testimonials", dependencies=[Depends(require_admin)])
async def create_testimonial(payload: TestimonialPayload):
    return await _create(Testimonial, payload, testimonial_to_dict)


@content_router.delete("/testimonials/{testimonial_id}", dependencies=[Depends(require_admin)])
async def delete_testimonial(testimonial_id: int):
    testimonial = await Testimonial.get_or_none(id=testimonial_id)
    if not testimonial:
        raise NotFound("Not found")
    try:
        await testimonial.delete()
    except BaseORMException as e:
        logger.exception(f"Failed to delete testimonial {testimonial_id}: {e}")
        raise StorageFailure("Failed to delete testimonial")
    return {"success": True}
