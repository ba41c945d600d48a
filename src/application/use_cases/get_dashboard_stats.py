"""Get Dashboard Stats Use Case: stat-grid figures for the home screen."""

from src.application.dto.requests import DashboardStatsRequest
from src.application.dto.responses import DashboardStatsResponse
from src.core.entities.stats import DashboardStats
from src.core.services.stats_aggregator import StatsAggregator


class GetDashboardStatsUseCase:
    """Read the dashboard summary figures."""

    def __init__(self, aggregator: StatsAggregator | None = None):
        self._aggregator = aggregator

    def _get_aggregator(self) -> StatsAggregator:
        if self._aggregator is None:
            from src.application.services import get_stats_aggregator

            self._aggregator = get_stats_aggregator()
        return self._aggregator

    async def execute(
        self, request: DashboardStatsRequest | None = None
    ) -> DashboardStats:
        request = request or DashboardStatsRequest()
        return await self._get_aggregator().dashboard(
            since=request.since, until=request.until
        )

    def to_response(self, stats: DashboardStats) -> DashboardStatsResponse:
        return DashboardStatsResponse(
            total_sales=f"{stats.total_sales:,.2f}",
            total_sales_value=stats.total_sales,
            orders_count=stats.orders_count,
            active_queue=stats.active_queue,
            low_stock=stats.low_stock,
            expiring_soon=stats.expiring_soon,
            orders_by_status=stats.orders_by_status,
            generated_at=stats.generated_at,
        )
