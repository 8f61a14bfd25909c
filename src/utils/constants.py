# File extension → MIME type mapping
MIME_MAP = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "doc": "application/msword",
    "txt": "text/plain",
}

# MIME type → loader key used by the text extractor
LOADER_BY_MIME = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/msword": "doc",
    "text/plain": "txt",
}

# LLM generation configs
SCREENING_GENERATION_CONFIG = {
    "temperature": 0.1,
    "max_output_tokens": 4096,
    "response_mime_type": "application/json",
}

REPORT_GENERATION_CONFIG = {
    "temperature": 0.2,
    "max_output_tokens": 2048,
    "response_mime_type": "application/json",
}

FEEDBACK_GENERATION_CONFIG = {
    "temperature": 0.2,
    "max_output_tokens": 4096,
    "response_mime_type": "application/json",
}

# Practice-interview feedback categories, in display order
FEEDBACK_CATEGORIES = [
    "Communication Skills",
    "Technical Knowledge",
    "Problem-Solving",
    "Cultural & Role Fit",
    "Confidence & Clarity",
]

# Calendly event names
CALENDLY_INVITEE_CREATED = "invitee.created"
CALENDLY_SIGNATURE_HEADER = "Calendly-Webhook-Signature"

# Rejection reasons by match-score band (lower bound inclusive)
REJECTION_REASON_BANDS = [
    (0, ["Very low match score", "Insufficient relevant experience"]),
    (30, ["Below minimum match threshold", "Missing key technical skills"]),
    (50, ["Match score below shortlist threshold", "Some required qualifications missing"]),
]

STATS_DOCUMENT_ID = "current"
