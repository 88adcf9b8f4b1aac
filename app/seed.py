"""Tipos de riesgo precargados para el catalogo "riskTypes"."""
import logging

from app.config.settings import RISK_TYPES_COLLECTION

logger = logging.getLogger(__name__)

RISK_TYPES_TO_SEED = [
    "Acceso",
    "Alerta sonora / Alarma sonora",
    "Animales venenosos",
    "Atropellamiento",
    "Ausencia de biombo",
    "Ausencia de botón de emergencia",
    "Ausencia de ducha lavaojos",
    "Ausencia de EPC (contención, kit de mitigación, etc.)",
    "Ausencia de hoja de seguridad (FDS)",
    "Ausencia de jaula de productos químicos",
    "Ausencia de protector de esquinas",
    "Ausencia de señalero",
    "Ausencia de vigía",
    "Banco de trabajo inadecuado",
    "Barba",
    "Hueco en área de paso peatonal",
    "Cable guía",
    "Caja de bloqueo",
    "Calzo de neumáticos",
    "Piso resbaladizo",
    "Eslinga dañada / inadecuada / sin identificación",
    "Cinturón de seguridad averiado",
    "Colaborador desconoce los riesgos",
    "Colaborador sin EPP",
    "Conductor sin licencia",
    "Contaminación (agua, suelo, aire)",
    "Contacto con material caliente",
    "Control de entrada y salida",
    "Descarte incorrecto",
    "Detector de gas (filtro vencido / apagado / ausente)",
    "Documentación",
    "Entrada inadecuada",
    "Equipo inadecuado",
    "Espacio confinado",
    "Estrobo dañado / sin identificación",
    "Estructura inadecuada",
    "Exceso de material",
    "Exposición (altas temperaturas / chispas / productos químicos)",
    "Extintor (ausente / faltante)",
    "Falta de anclaje, aterramiento, bloqueo, capacitación, check list o EPP",
    "Cable pelado",
    "Baranda (ausente / inadecuada)",
    "Iluminación inadecuada",
    "Aislamiento (caído / deficiente / fuera de estándar)",
    "Grillete inadecuado o sin identificación",
    "Mapa de bloqueo",
    "Materiales dispersos / en exceso",
    "Material inflamable/explosivo cercano",
    "Polea dañada / sin identificación",
    "Argolla dañada / sin identificación",
    "Oxicorte fuera de estándar",
    "Estabilizadores mal apoyados",
    "Piso irregular",
    "Placa de liberación / identificación",
    "Plataforma con vano abierto",
    "Neumático averiado",
    "Tablón (inadecuado / dañado / irregular)",
    "Arista viva",
    "Riesgo de choque eléctrico",
    "Tecle dañado / sin identificación",
    "Traba de seguridad",
    "Fuga (producto químico / aceite)",
    "Varilla expuesta",
    "Vía con desnivel / obstáculo",
    "Vidrio expuesto",
]


def seed_risk_types(db):
    """Agrega los tipos de riesgo que aun no existen (sin distinguir mayusculas). Devuelve cuantos se agregaron."""
    collection = db.collection(RISK_TYPES_COLLECTION)
    existing = {
        (snapshot.to_dict() or {}).get("name", "").lower()
        for snapshot in collection.stream()
    }
    new_risk_types = [name for name in RISK_TYPES_TO_SEED if name.lower() not in existing]
    for name in new_risk_types:
        collection.add({"name": name})
    logger.info("Tipos de riesgo agregados: %d", len(new_risk_types))
    return len(new_risk_types)
