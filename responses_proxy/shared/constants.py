RESPONSES_ENDPOINT = "/responses"

METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed. Use POST."
MISSING_FIELDS_MESSAGE = "Missing required fields: system, input"
INVALID_BODY_MESSAGE = "Invalid request body"
UPSTREAM_ERROR_MESSAGE = "OpenAI API error"
UNKNOWN_ERROR_MESSAGE = "Unknown server error"

DEVELOPER_ROLE = "developer"
ASSISTANT_ROLE = "assistant"
INPUT_TEXT_TYPE = "input_text"
