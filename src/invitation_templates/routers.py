from fastapi import APIRouter

from .features.create_template.router import router as create_template_router
from .features.delete_template.router import router as delete_template_router
from .features.get_template.router import router as get_template_router
from .features.list_templates.router import router as list_templates_router
from .features.template_categories.router import router as template_categories_router
from .features.update_template.router import router as update_template_router

router = APIRouter()

router.include_router(list_templates_router)
router.include_router(create_template_router)
router.include_router(get_template_router)
router.include_router(update_template_router)
router.include_router(delete_template_router)
router.include_router(template_categories_router)
