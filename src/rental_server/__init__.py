"""rental_server — FastAPI REST server for the needs-assessment questionnaire."""
