from functools import lru_cache
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.config import settings
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.ports.forecast_provider import ForecastProviderPort
from app.application.ports.speech import SpeechPort
from app.application.use_cases.bookings import BookingsUseCase
from app.application.use_cases.dialogue_controller import DialogueController
from app.application.use_cases.resolve_weather import ResolveWeatherUseCase
from app.infrastructure.speech.console_speech import ConsoleSpeech
from app.infrastructure.store.json_store import JsonBookingStore
from app.infrastructure.store.memory_store import MemoryBookingStore
from app.infrastructure.weather.mock_forecast import MockForecastProvider
from app.infrastructure.weather.openweather_client import OpenWeatherForecastProvider


logger = logging.getLogger(__name__)


@lru_cache
def get_timezone() -> ZoneInfo:
    try:
        return ZoneInfo(settings.RESTAURANT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown RESTAURANT_TIMEZONE, falling back to UTC", extra={"reason": settings.RESTAURANT_TIMEZONE})
        return ZoneInfo("UTC")


@lru_cache
def get_booking_store() -> BookingRepositoryPort:
    if settings.STORE_PROVIDER.lower() == "memory":
        return MemoryBookingStore()
    return JsonBookingStore(data_dir=settings.BOOKINGS_DATA_DIR)


def get_forecast_provider() -> ForecastProviderPort:
    if settings.WEATHER_PROVIDER.lower() == "mock":
        if settings.ENV.lower() not in {"dev", "local"}:
            logger.warning("Mock forecast provider in use outside dev", extra={"reason": settings.ENV})
        return MockForecastProvider()
    # A missing key surfaces as ForecastProviderError on the first request.
    return OpenWeatherForecastProvider()


def get_bookings_use_case() -> BookingsUseCase:
    return BookingsUseCase(store=get_booking_store(), timezone=get_timezone())


def get_resolve_weather_use_case() -> ResolveWeatherUseCase:
    return ResolveWeatherUseCase(provider=get_forecast_provider(), timezone=get_timezone())


def get_dialogue_controller(speech: SpeechPort | None = None) -> DialogueController:
    return DialogueController(
        speech=speech or ConsoleSpeech(language=settings.SPEECH_LANGUAGE),
        weather=get_resolve_weather_use_case(),
        bookings=get_bookings_use_case(),
        timezone=get_timezone(),
        prompt_delay_seconds=settings.PROMPT_DELAY_SECONDS,
    )
