"""User facing messages that are part of the HTTP contract."""

# Authorization denials
NOT_AUTHORIZED_RESOURCE = "Not authorized to access this resource"
NOT_AUTHORIZED_ACCESS_USER = "Not authorized to access this user data"
NOT_AUTHORIZED_MODIFY_USER_DATA = "Not authorized to modify this user data"
NOT_AUTHORIZED_UPDATE_ROLE = "Not authorized to update user role"
NOT_AUTHORIZED_UPDATE_USER = "Not authorized to update this user"
NOT_AUTHORIZED_DELETE_USER = "Not authorized to delete this user"
NOT_AUTHORIZED_UPDATE_PROPERTY = "Not authorized to update this property"
NOT_AUTHORIZED_UPDATE_VERIFICATION = "Not authorized to update verification status"
NOT_AUTHORIZED_DELETE_PROPERTY = "Not authorized to delete this property"
NOT_AUTHORIZED_UPLOAD_MEDIA = "Not authorized to upload media for this property"
NOT_AUTHORIZED_UPDATE_MEDIA = "Not authorized to update this media"
NOT_AUTHORIZED_DELETE_MEDIA = "Not authorized to delete this media"

# Authentication
AUTHENTICATION_REQUIRED = "Authentication required"
INVALID_CREDENTIALS = "Invalid credentials"
USER_EXISTS = "User already exists with this email"
LOGIN_SUCCESSFUL = "Login successful"
REGISTER_SUCCESSFUL = "User registered successfully"

# Favorites
ALREADY_FAVORITE = "Property already in favorites"

# Uploads
NO_FILES_UPLOADED = "No files uploaded"
INVALID_FILE_TYPE = "Invalid file type. Only JPEG, PNG, GIF, and PDF are allowed."
FILE_TOO_LARGE = "File too large"
TOO_MANY_FILES = "Too many files"

# Generic
RESOURCE_NOT_FOUND = "Resource not found"
INTERNAL_ERROR = "Internal server error"
