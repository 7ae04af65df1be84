"""
Dependency injection container using dependency-injector.
Wires application-scoped services and controllers.
"""

from dependency_injector import containers, providers

from app.services.health_service import HealthService
from app.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""
    
    # Services
    health_service = providers.Singleton(
        HealthService,
    )
    
    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Install the container built during application startup."""
    global _container
    _container = container
