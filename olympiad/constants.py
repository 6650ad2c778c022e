"""Global constants for the olympiad application."""

# Firestore collections
PROFILES_COLLECTION = "profiles"
TOURNAMENTS_COLLECTION = "tournaments"
REGISTRATIONS_COLLECTION = "tournament_registrations"
RESULTS_COLLECTION = "tournament_results"

# Profile fields that must be filled in before registering for a tournament
PROFILE_REQUIRED_FIELDS = (
    "last_name",
    "first_name",
    "middle_name",
    "birth_date",
    "city",
    "school",
    "class_number",
    "parent_name",
    "teacher_name",
)

MIN_CLASS_NUMBER = 1
MAX_CLASS_NUMBER = 11

# Tournament formats
FORMAT_ONLINE = "online"
FORMAT_OFFLINE = "offline"
FORMAT_HYBRID = "hybrid"

# Landing page
RECENT_TOURNAMENTS_LIMIT = 3
TOP_PARTICIPANTS_LIMIT = 3

# Webhook relay
WEBHOOK_ENDPOINT = "/api/webhooks/tournament-registration"
WEBHOOK_REQUIRED_FIELDS = (
    "user_id",
    "full_name",
    "school",
    "class",
    "tournament_id",
    "registration_date",
)

DEMO_USER_ID = "demo-user-id"

# Session keys holding demo-mode state, which is never written to Firestore
DEMO_PROFILE_SESSION_KEY = "demo_profile"
DEMO_REGISTRATIONS_SESSION_KEY = "demo_registrations"
