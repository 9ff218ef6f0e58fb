class GlobalMessages:
    # Demo request messages
    DEMO_REQUEST_SENT = "Your request has been sent"
    MISSING_REQUIRED_PARAMETERS = "Missing required parameters"
    INVALID_EMAIL = "Invalid email"

    # Health
    API_RUNNING = "API is running"
