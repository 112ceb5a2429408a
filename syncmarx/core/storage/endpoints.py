# Google endpoints consumed by the Drive adapter. The token refresh proxy is
# deployment specific and comes from ConfigManager instead.
TOKENINFO_URL = 'https://www.googleapis.com/oauth2/v1/tokeninfo'
REVOKE_URL = 'https://accounts.google.com/o/oauth2/revoke'
FILES_URL = 'https://www.googleapis.com/drive/v3/files'
UPLOAD_URL = 'https://www.googleapis.com/upload/drive/v3/files'

# Hidden per-application folder; every file this adapter writes lives here
APP_DATA_FOLDER = 'appDataFolder'
UPLOAD_MIME_TYPE = 'text/plain'
