from app.config.firebase_init import initialize_firebase


def get_db():
    """Dependencia de FastAPI: cliente de Firestore de la app por defecto."""
    return initialize_firebase()
