# app/config/settings.py
import os

# Credenciales de Firebase: JSON de la cuenta de servicio codificado en base64
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS")

# Origenes permitidos para CORS (separados por comas)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:9002").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", 8000))

# Colecciones de Firestore
INSPECTIONS_COLLECTION = "inspections"
FCM_TOKENS_COLLECTION = "fcmTokens"
AREAS_COLLECTION = "areas"
AUDITORS_COLLECTION = "auditors"
RISK_TYPES_COLLECTION = "riskTypes"

# Roles admitidos en el custom claim "role"
ROLE_ADMIN = "admin"
ROLE_AUDITOR = "auditor"
ROLES = (ROLE_ADMIN, ROLE_AUDITOR)

# Fotos adjuntas a una inspeccion
MAX_PHOTOS = 5
MAX_FILE_SIZE_BYTES = 2 * 1024 * 1024
MAX_DIMENSION = 1024
COMPRESSION_QUALITY = 0.7
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")

# Notificaciones push
NOTIFICATION_TITLE = "Nueva inspección registrada"
NOTIFICATION_CLICK_ACTION = "/inspections"
UNKNOWN_AREA_TEXT = "Área no especificada"
FCM_MULTICAST_LIMIT = 500

# Gemini
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

# Cache de resultados de IA del dashboard (segundos)
AI_CACHE_TTL_SECONDS = int(os.getenv("AI_CACHE_TTL_SECONDS", 3600))
AI_CACHE_MAX_ENTRIES = int(os.getenv("AI_CACHE_MAX_ENTRIES", 32))

# Rango por defecto del dashboard (dias hacia atras)
DASHBOARD_DEFAULT_DAYS = 30
