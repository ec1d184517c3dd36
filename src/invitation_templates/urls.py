TEMPLATES_URL = "/api/template"
CREATE_TEMPLATE_URL = "/api/template/create-template"
TEMPLATE_URL = "/api/template/{template_id}"
TEMPLATE_CATEGORIES_URL = "/api/template-categories"
TEMPLATE_CATEGORY_URL = "/api/template-categories/{category_id}"
