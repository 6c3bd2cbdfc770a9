from pydantic import BaseModel


class AnalyticsSummary(BaseModel):
    total_generations: int
    total_cost_cents: int
    average_latency_ms: float
    success_rate: float
