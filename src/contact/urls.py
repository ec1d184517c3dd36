CONTACT_URL = "/api/contact"
