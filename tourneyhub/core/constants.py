"""Global constants for the tourneyhub application."""

import datetime

# Collections
USERS_COLLECTION = "users"
TOURNAMENTS_COLLECTION = "active-tournaments"
TRANSACTIONS_COLLECTION = "transactions"
CATEGORIES_COLLECTION = "tournament-categories"
FEEDBACK_COLLECTION = "feedback"

FIRESTORE_BATCH_LIMIT = 400

# Roles
ADMIN_ROLE = "admin"

# Slot booking
DEFAULT_TOURNAMENT_SLOTS = 50
SLOT_STATUS_CONFIRMED = "confirmed"

# Wallet
TRANSACTION_DEPOSIT = "deposit"
TRANSACTION_WITHDRAW = "withdraw"
TRANSACTION_TYPES = (TRANSACTION_DEPOSIT, TRANSACTION_WITHDRAW)

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STATUS_FAILED = "failed"
TERMINAL_STATUSES = (STATUS_APPROVED, STATUS_REJECTED, STATUS_FAILED)

MIN_WITHDRAWAL = 500
STARTING_COINS = 0

# Updates
UPDATE_FRESHNESS_WINDOW = datetime.timedelta(hours=1)
LAST_READ_FIELD = "lastUpdatesRead"
LEGACY_LAST_READ_FIELD = "lastReadUpdates"
LEGACY_TIMESTAMP_SUFFIX = " UTC+5"
LEGACY_TIMEZONE = datetime.timezone(datetime.timedelta(hours=5))
NOT_AVAILABLE = "Not available"

# Leaderboard
LEADERBOARD_SIZE = 5

# Feedback
FEEDBACK_TYPES = ("general", "bug", "feature")

# Uploads
CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"
UPLOAD_TIMEOUT_SECONDS = 10

# Email
SMTP_AUTH_ERROR_CODE = 534
