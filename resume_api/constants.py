# Media types accepted by the text extractor. Images are matched by prefix.
PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
IMAGE_MEDIA_TYPE_PREFIX = "image/"

# Multipart form field holding the uploaded resume
RESUME_FIELD_NAME = "resume"

# Response bodies. The "spanResume" key is kept as-is for existing clients.
SPAM_RESPONSE_KEY = "spanResume"
SPAM_WARNING_MESSAGE = (
    "⚠️ This resume may be spam or incomplete or Valid resume required"
)
GENERIC_ERROR_MESSAGE = "Insert proper resume, Valid resume required"
RATE_LIMIT_MESSAGE = "Too many requests, please try again later."
