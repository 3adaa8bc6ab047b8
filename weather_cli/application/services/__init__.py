from weather_cli.application.services.fetch_coordinator import FetchCoordinator

__all__ = ['FetchCoordinator']
