"""Questionnaire constants shared across the SDK.

These values are referenced by the planner, the selection state, the
attachment manager and the flow controller.  They mirror the conventions
encoded in the needs-assessment question catalog.

The attachment limits can be overridden via environment variables so that
deployments can adjust them without code changes.  The category tables can
also be overridden per catalog (see ``catalog/needs_assessment.yaml``).
"""

import os

# Categories that are always shown and always count as selected, in the
# canonical order they are presented in.
MANDATORY_CATEGORIES: tuple[str, ...] = (
    "Informacje ogólne",
    "Warunki otoczenia",
    "Logistyka i dodatkowe usługi",
    "Dodatkowe informacje",
)

# A category whose name ends with this suffix is an accessory category,
# only shown while its base equipment category is selected.
ACCESSORY_SUFFIX = " - wyposażenie"

# Accessory base names that differ from the stored equipment category name.
# Upstream catalog naming drift; extend only when the catalog confirms it.
CATEGORY_ALIASES: dict[str, str] = {
    "Maszty oświetleniowe": "Maszt oświetleniowy",
    "Nagrzewnice": "Nagrzewnica",
}

# categoryType values used by the catalog.  Absence means "general".
CATEGORY_TYPE_GENERAL = "general"
CATEGORY_TYPE_EQUIPMENT = "equipment"

# Attachment limits.
# Overridable via NEEDS_ASSESSMENT_MAX_ATTACHMENTS / NEEDS_ASSESSMENT_MAX_FILE_MB.
MAX_ATTACHMENTS = int(os.getenv("NEEDS_ASSESSMENT_MAX_ATTACHMENTS", "10"))
MAX_ATTACHMENT_BYTES = int(os.getenv("NEEDS_ASSESSMENT_MAX_FILE_MB", "50")) * 1024 * 1024

# The staff page caps attachments lower than the client portal.
STAFF_MAX_ATTACHMENTS = 5

# Mount point under which uploaded objects are publicly retrievable.
PUBLIC_UPLOAD_MOUNT = os.getenv("NEEDS_ASSESSMENT_PUBLIC_MOUNT", "/objects/uploads/")

# Fixed answer tokens written by the boolean and radio question widgets.
ANSWER_TRUE = "true"
ANSWER_FALSE = "false"
RADIO_YES = "tak"
RADIO_NO = "nie"

# User-facing notices (Polish, as shown in the portal).
MESSAGES: dict[str, str] = {
    "required_missing": "Odpowiedz na wszystkie wymagane pytania, aby przejść dalej",
    "identity_missing": "Wypełnij przynajmniej jedno pole klienta",
    "too_many_files": "Można dodać maksymalnie {max_files} załączników",
    "file_too_large": "Plik {name} jest za duży. Maksymalny rozmiar to {max_mb}MB",
    "file_type_rejected": "Plik {name} ma niedozwolony typ",
    "upload_failed": "Nie udało się wgrać pliku {name}",
    "upload_success": "Dodano {count} załącznik(i)",
    "catalog_failed": "Nie udało się pobrać pytań",
    "submit_failed": "Wystąpił problem podczas wysyłania. Spróbuj ponownie.",
    "submit_success_client": (
        "Twoje odpowiedzi zostały wysłane. Skontaktujemy się z Tobą w ciągu 24 godzin."
    ),
    "submit_success_staff": "Badanie potrzeb zostało zapisane z numerem {response_number}",
    "unauthorized": "Sesja wygasła. Zaloguj się ponownie.",
}
