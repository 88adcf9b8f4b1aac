from app.schemas.dashboard import TrendAnalysis

TREND_PROMPT = """Eres un analista de seguridad laboral encargado de identificar tendencias en inspecciones de seguridad.

Analiza los siguientes datos para identificar las áreas y los tipos de riesgo más frecuentes.
Proporciona un resumen de las tendencias generales de riesgo y de las oportunidades de mejora.

Datos de las inspecciones:
{records}

Responde en JSON con los campos most_frequent_areas ([{{"area", "count"}}]),
most_frequent_risk_types ([{{"risk_type", "count"}}]) y risk_summary.
"""


def build_trend_prompt(inspections):
    records = "\n".join(
        f"- Área: {i.area}, Tipo de riesgo: {i.risk_type}, Potencial: {i.potential.value}, Descripción: {i.description}"
        for i in inspections
    )
    return TREND_PROMPT.format(records=records)


async def analyze_trends(inspections, client) -> TrendAnalysis:
    return await client.generate_json(build_trend_prompt(inspections), TrendAnalysis)
