from app.schemas.dashboard import RiskForecast

FORECAST_PROMPT = """Eres un experto en seguridad encargado de predecir posibles incidentes a partir del historial y de las tendencias identificadas.

Historial:
{history}

Tendencias identificadas:
{trends}

Con base en el historial y las tendencias, predice posibles incidentes futuros, explica el razonamiento
de tus predicciones y sugiere acciones preventivas para mitigarlos.

Responde en JSON con los campos predicted_incidents, reasoning y preventative_actions.
"""


def format_history(inspections):
    return "\n".join(
        f"El {i.observed_at.isoformat()} en {i.area}, ocurrió un incidente del tipo '{i.risk_type}' "
        f"con potencial {i.potential.value}. Descripción: {i.description}"
        for i in inspections
    )


async def forecast_risks(inspections, identified_trends, client) -> RiskForecast:
    prompt = FORECAST_PROMPT.format(history=format_history(inspections), trends=identified_trends)
    return await client.generate_json(prompt, RiskForecast)
