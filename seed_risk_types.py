from app.config.firebase_init import initialize_firebase
from app.seed import seed_risk_types

if __name__ == "__main__":
    print("Cargando tipos de riesgo en Firestore...")
    count = seed_risk_types(initialize_firebase())
    print(f"Carga completada: {count} tipos de riesgo agregados.")
