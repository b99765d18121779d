from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from shared.constants import (
    SUMMARY_AUTHORIZED,
    SUMMARY_AUTHORIZED_WITH_USERNAME,
    SUMMARY_NOT_AUTHORIZED,
    WORLD_LAT_MAX_DEG,
    WORLD_LNG_HALF_SPAN_DEG,
    InteractionKind,
    QuestStatus,
)


class GeoPosition(BaseModel):
    """Географическая позиция WGS84 в градусах."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

    @field_validator('latitude')
    @classmethod
    def validate_latitude(cls, v: float) -> float:
        v = float(v)
        if not (-WORLD_LAT_MAX_DEG <= v <= WORLD_LAT_MAX_DEG):
            msg = 'latitude должна быть в диапазоне [-90, 90]'
            raise ValueError(msg)
        return v

    @field_validator('longitude')
    @classmethod
    def validate_longitude(cls, v: float) -> float:
        v = float(v)
        if not (-WORLD_LNG_HALF_SPAN_DEG <= v <= WORLD_LNG_HALF_SPAN_DEG):
            msg = 'longitude должна быть в диапазоне [-180, 180]'
            raise ValueError(msg)
        return v


class BoundingBox(BaseModel):
    """Прямоугольник в градусах (юг, запад, север, восток)."""

    model_config = ConfigDict(frozen=True)

    min_latitude: float
    min_longitude: float
    max_latitude: float
    max_longitude: float


class TileCoordinate(BaseModel):
    """Slippy-map tile; hashable so it can key sets and dicts."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    zoom: int

    @field_validator('x', 'y', 'zoom')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        v = int(v)
        if v < 0:
            msg = 'координаты тайла не могут быть отрицательными'
            raise ValueError(msg)
        return v


class TileRect(BaseModel):
    """Inclusive rectangle of tiles at one zoom level."""

    model_config = ConfigDict(frozen=True)

    left: int
    top: int
    right: int
    bottom: int
    zoom: int

    def tiles(self) -> list[TileCoordinate]:
        return [
            TileCoordinate(x=x, y=y, zoom=self.zoom)
            for y in range(self.top, self.bottom + 1)
            for x in range(self.left, self.right + 1)
        ]


class AuthorizationState(BaseModel):
    """Снимок состояния авторизации на момент расчёта сводки."""

    is_authorized: bool
    username: str | None = None


class SummaryKind(str, Enum):
    NOT_AUTHORIZED = 'not_authorized'
    AUTHORIZED = 'authorized'
    AUTHORIZED_WITH_USERNAME = 'authorized_with_username'


class SummaryText(BaseModel):
    """Templated authorization summary shown under the 'oauth' entry."""

    model_config = ConfigDict(frozen=True)

    kind: SummaryKind
    username: str | None = None

    @classmethod
    def not_authorized(cls) -> 'SummaryText':
        return cls(kind=SummaryKind.NOT_AUTHORIZED)

    @classmethod
    def authorized(cls) -> 'SummaryText':
        return cls(kind=SummaryKind.AUTHORIZED)

    @classmethod
    def authorized_with_username(cls, username: str) -> 'SummaryText':
        return cls(kind=SummaryKind.AUTHORIZED_WITH_USERNAME, username=username)

    def render(self) -> str:
        """Render with the built-in English templates."""
        if self.kind is SummaryKind.AUTHORIZED_WITH_USERNAME:
            return SUMMARY_AUTHORIZED_WITH_USERNAME.format(username=self.username)
        if self.kind is SummaryKind.AUTHORIZED:
            return SUMMARY_AUTHORIZED
        return SUMMARY_NOT_AUTHORIZED


class PreferenceEntry(BaseModel):
    """
    Пункт экрана настроек.

    Тип взаимодействия задаётся явно (interaction), а не выводится из класса
    виджета: TOGGLE меняет значение сразу, DIALOG открывает под-диалог,
    ACTION вызывает обработчик нажатия.
    """

    model_config = ConfigDict(validate_assignment=True)

    key: str
    title: str
    interaction: InteractionKind
    enabled: bool = True
    summary: SummaryText | str | None = None

    @property
    def opens_dialog(self) -> bool:
        return self.interaction is InteractionKind.DIALOG


class NoteQuest(BaseModel):
    """Quest asking the user to resolve an OSM note."""

    model_config = ConfigDict(validate_assignment=True)

    note_id: int
    status: QuestStatus = QuestStatus.NEW
    text: str = ''
