"""FastAPI application factory."""

import logging
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, Response, status

from farm_dashboard.api.models import AnimalPayload, FilterPayload, SelectionPayload
from farm_dashboard.api.reports import router as reports_router
from farm_dashboard.app_logging import configure_logging
from farm_dashboard.containers import AppContainer
from farm_dashboard.domain.animals import AnimalRecord, animal_to_payload
from farm_dashboard.domain.stats import stats_to_payload
from farm_dashboard.services.export import export_dashboard


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    service = container.dashboard_service

    def log_error(message: str) -> None:
        logger.warning("Dashboard error: %s", message)

    service.error_channel.subscribe(log_error)

    app = FastAPI(title="Farm Dashboard")
    app.state.container = container

    app.include_router(reports_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/animals")
    async def list_animals(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        animals = await state_container.dashboard_service.get_animals()
        return {"animals": [animal_to_payload(animal) for animal in animals]}

    @app.get("/animals/filtered")
    async def filtered_animals(request: Request) -> dict[str, object]:
        """Animals matching the current filter text."""
        state_container: AppContainer = request.app.state.container
        dashboard = state_container.dashboard_service
        await dashboard.get_animals()
        return {
            "filter": dashboard.get_filter(),
            "animals": [
                animal_to_payload(animal)
                for animal in dashboard.get_filtered_animals()
            ],
        }

    @app.get("/animals/{animal_id}")
    async def get_animal(animal_id: int, request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        animal = await state_container.dashboard_service.get_animal_by_id(animal_id)
        if animal is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return animal_to_payload(animal)

    @app.post("/animals", status_code=status.HTTP_201_CREATED)
    async def create_animal(
        payload: AnimalPayload, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        dashboard = state_container.dashboard_service
        partial = payload.to_partial()
        result = dashboard.validate_animal(partial)
        if not result.valid:
            raise HTTPException(status_code=422, detail={"errors": result.errors})
        animal = dashboard.add_animal(partial)
        logger.info("Added animal %s (%s)", animal.id, animal.name)
        return animal_to_payload(animal)

    @app.patch("/animals/{animal_id}")
    async def update_animal(
        animal_id: int, payload: AnimalPayload, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        dashboard = state_container.dashboard_service
        existing = dashboard.find_animal(animal_id)
        if existing is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        partial = payload.to_partial()
        result = dashboard.validate_animal(_merged(existing, partial))
        if not result.valid:
            raise HTTPException(status_code=422, detail={"errors": result.errors})
        animal = dashboard.update_animal(animal_id, partial)
        if animal is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return animal_to_payload(animal)

    @app.delete("/animals/{animal_id}")
    async def delete_animal(animal_id: int, request: Request) -> dict[str, str]:
        state_container: AppContainer = request.app.state.container
        if not state_container.dashboard_service.delete_animal(animal_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "deleted"}

    @app.get("/stats")
    async def get_stats(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        stats = await state_container.dashboard_service.get_stats()
        return stats_to_payload(stats)

    @app.get("/filter")
    async def get_filter(request: Request) -> dict[str, str]:
        state_container: AppContainer = request.app.state.container
        return {"filter": state_container.dashboard_service.get_filter()}

    @app.put("/filter")
    async def set_filter(payload: FilterPayload, request: Request) -> dict[str, str]:
        state_container: AppContainer = request.app.state.container
        state_container.dashboard_service.set_filter(payload.filter)
        return {"filter": payload.filter}

    @app.get("/selection")
    async def get_selection(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        selected = state_container.dashboard_service.get_selected_animal()
        return {"animal": animal_to_payload(selected) if selected else None}

    @app.put("/selection")
    async def set_selection(
        payload: SelectionPayload, request: Request
    ) -> dict[str, object]:
        """Select an animal by id, or clear the selection with a null id."""
        state_container: AppContainer = request.app.state.container
        dashboard = state_container.dashboard_service
        animal = None
        if payload.animal_id is not None:
            animal = await dashboard.get_animal_by_id(payload.animal_id)
            if animal is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        dashboard.select_animal(animal)
        return {"animal": animal_to_payload(animal) if animal else None}

    @app.delete("/cache")
    async def clear_cache(request: Request) -> dict[str, str]:
        state_container: AppContainer = request.app.state.container
        state_container.dashboard_service.clear_all_cache()
        return {"status": "cleared"}

    @app.get("/export")
    async def export_csv(request: Request) -> Response:
        """Download the currently loaded animals and stats as CSV."""
        state_container: AppContainer = request.app.state.container
        dashboard = state_container.dashboard_service
        export = export_dashboard(
            dashboard.animals_channel.value or [],
            dashboard.stats_channel.value,
            style=state_container.settings.csv_style,
        )
        return Response(
            content=export.content,
            media_type=export.media_type,
            headers={
                "Content-Disposition": f'attachment; filename="{export.filename}"'
            },
        )

    return app


def _merged(existing: AnimalRecord, partial: dict[str, object]) -> dict[str, object]:
    """Overlay provided fields on an existing record for validation."""
    merged = asdict(existing)
    merged.update({key: value for key, value in partial.items() if value is not None})
    return merged
