from dotenv import load_dotenv
import os

load_dotenv()

# Spotify credentials (REQUIRED)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://127.0.0.1:3100/api/v1/callback"
)

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_REQUESTS_TIMEOUT = float(os.getenv("SPOTIFY_REQUESTS_TIMEOUT", "10"))

SCOPES = [
    "user-read-private",
    "user-modify-playback-state",
    "user-read-playback-state",
    "user-read-currently-playing",
    "user-read-recently-played",
    "user-read-playback-position",
    "playlist-read-collaborative",
    "playlist-read-private",
    "app-remote-control",
    "streaming",
    "user-library-read",
    "ugc-image-upload",
    "playlist-modify-public",
    "playlist-modify-private",
]

# Party queue
PARTY_PLAYLIST_ID = os.getenv("PARTY_PLAYLIST_ID", "1cNAS8rrkM5a4HODopyP9B")
PARTY_DEVICE_ID = os.getenv(
    "PARTY_DEVICE_ID", "k52q6vu58eas8ghpundxebya6irx6ihd342u7bwi"
)
RESERVED_PLAYLIST_NAME = "zQueue"

# Outbound call policy
MAX_CALL_ATTEMPTS = int(os.getenv("MAX_CALL_ATTEMPTS", "3"))

# Pagination (Spotify caps playlist mutations at 100 items per call)
PLAYLISTS_PAGE_SIZE = 10
TRACKS_PAGE_SIZE = 50
RECENT_TRACKS_LIMIT = 50
PLAYLIST_BATCH_SIZE = 100

# Party-play pacing, in seconds
DRAIN_DELAY_SECONDS = 0.3
PLAY_SETTLE_DELAY_SECONDS = 0.5

# HTTP server
API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "3100"))
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
