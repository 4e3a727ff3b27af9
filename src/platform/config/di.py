"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.segment_booking.app.command.seat_status_reconciler import SeatStatusReconciler
from src.service.segment_booking.app.query.availability_checker import AvailabilityChecker
from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.domain.fare_policy import FareCalculator
from src.service.segment_booking.driven_adapter.repo.occupancy_interval_repo_impl import (
    OccupancyIntervalRepoImpl,
)
from src.service.segment_booking.driven_adapter.repo.physical_seat_repo_impl import (
    PhysicalSeatRepoImpl,
)
from src.service.segment_booking.driven_adapter.repo.route_stop_query_repo_impl import (
    RouteStopQueryRepoImpl,
)
from src.service.segment_booking.driven_adapter.state.in_memory_occupancy_interval_repo import (
    InMemoryOccupancyIntervalRepo,
)
from src.service.segment_booking.driven_adapter.state.in_memory_physical_seat_repo import (
    InMemoryPhysicalSeatRepo,
)
from src.service.segment_booking.driven_adapter.state.in_memory_route_stop_query_repo import (
    InMemoryRouteStopQueryRepo,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # Repositories, picked by SEAT_STORE_BACKEND (stateless SQL repos use session_factory per call)
    route_stop_query_repo = providers.Selector(
        config_service.provided.SEAT_STORE_BACKEND,
        postgres=providers.Singleton(
            RouteStopQueryRepoImpl, session_factory=database.provided.session
        ),
        memory=providers.Singleton(InMemoryRouteStopQueryRepo),
    )
    physical_seat_repo = providers.Selector(
        config_service.provided.SEAT_STORE_BACKEND,
        postgres=providers.Singleton(
            PhysicalSeatRepoImpl, session_factory=database.provided.session
        ),
        memory=providers.Singleton(InMemoryPhysicalSeatRepo),
    )
    occupancy_interval_repo = providers.Selector(
        config_service.provided.SEAT_STORE_BACKEND,
        postgres=providers.Singleton(
            OccupancyIntervalRepoImpl, session_factory=database.provided.session
        ),
        memory=providers.Singleton(InMemoryOccupancyIntervalRepo),
    )

    # Domain services
    fare_calculator = providers.Singleton(FareCalculator)

    # Shared application components (stateless, can be Singleton)
    route_sequence_reader = providers.Singleton(
        RouteSequenceReader, route_stop_query_repo=route_stop_query_repo
    )
    availability_checker = providers.Singleton(
        AvailabilityChecker,
        route_sequence_reader=route_sequence_reader,
        physical_seat_repo=physical_seat_repo,
        occupancy_interval_repo=occupancy_interval_repo,
    )
    seat_status_reconciler = providers.Singleton(
        SeatStatusReconciler,
        route_sequence_reader=route_sequence_reader,
        physical_seat_repo=physical_seat_repo,
        occupancy_interval_repo=occupancy_interval_repo,
        strategy=config_service.provided.RECONCILE_STRATEGY,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
