from enum import Enum

# Уровень зума, на котором приложение разбивает и кэширует загруженные квесты.
# Должен совпадать с зумом, использованным при загрузке, иначе инвалидация
# попадёт не в тот тайл.
QUEST_TILE_ZOOM = 14

# Предельная широта проекции Web Mercator (градусы)
MERCATOR_MAX_LAT_DEG = 85.0511287798066
WORLD_LNG_SPAN_DEG = 360.0
WORLD_LNG_HALF_SPAN_DEG = 180.0
WORLD_LAT_MAX_DEG = 90.0

# --- Ключи настроек (основное хранилище)
PREF_OAUTH_ACCESS_TOKEN = 'oauth.accessToken'
PREF_OAUTH_ACCESS_TOKEN_SECRET = 'oauth.accessTokenSecret'
PREF_OSM_USER_NAME = 'osm.username'
PREF_SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS = 'display.nonQuestionNotes'
PREF_AUTOSYNC = 'autosync'
PREF_THEME = 'theme'

# --- Ключи экрана настроек, не связанные с хранимыми значениями
PREF_SCREEN_OAUTH = 'oauth'
PREF_SCREEN_QUESTS = 'quests'
PREF_SCREEN_QUESTS_INVALIDATION = 'quests.invalidation'

# --- Пространство имён последнего вида карты
MAP_PREFS_NAMESPACE = 'map_fragment'
MAP_PREF_LAT = 'map_lat'
MAP_PREF_LON = 'map_lon'
DEFAULT_PREFS_NAMESPACE = 'default'

# Тег диалога авторизации, по которому его находит ретранслятор колбэков
OAUTH_DIALOG_TAG = 'OAuthDialog'

# Тег диалога для настроек с собственным под-диалогом
PREFERENCE_DIALOG_TAG = 'PreferenceFragment.DIALOG'

# Вопросительные знаки разных письменностей: латинский, греческий, точка с
# запятой (часто вместо греческого), арабский, армянский, эфиопский, полноширинный
QUESTION_MARKS = '?\u037e;\u061f\u055e\u1367\uff1f'

# --- Тексты сводки авторизации (локализация вне рамок ядра)
SUMMARY_NOT_AUTHORIZED = 'Not authorized. Answers can not be uploaded.'
SUMMARY_AUTHORIZED = 'Authorized'
SUMMARY_AUTHORIZED_WITH_USERNAME = 'Authorized as {username}'

# --- Конфигурация и логирование
CONFIG_FILE_NAME = 'questmap.toml'
CONFIG_ENV_PATH = 'QUESTMAP_CONFIG'
CONFIG_ENV_DATA_DIR = 'QUESTMAP_DATA_DIR'
CONFIG_ENV_LOG_LEVEL = 'QUESTMAP_LOG_LEVEL'
DEFAULT_DATA_DIR = '.questmap'
DEFAULT_LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Имена файлов SQLite внутри каталога данных
DOWNLOADED_TILES_DB_NAME = 'downloaded_tiles.db'
NOTE_QUESTS_DB_NAME = 'note_quests.db'

# Имя фонового потока задачи видимости заметок
NOTE_VISIBILITY_THREAD_NAME = 'note-visibility'

# --- События модели экрана настроек
SCREEN_EVENT_SUMMARY_CHANGED = 'summary_changed'
SCREEN_EVENT_ENABLED_CHANGED = 'enabled_changed'
SCREEN_EVENT_DIALOG_SHOWN = 'dialog_shown'


class InteractionKind(str, Enum):
    """Тип взаимодействия пункта экрана настроек."""

    TOGGLE = 'toggle'
    DIALOG = 'dialog'
    ACTION = 'action'


class QuestStatus(str, Enum):
    """Статус квеста-заметки."""

    NEW = 'NEW'
    INVISIBLE = 'INVISIBLE'
    ANSWERED = 'ANSWERED'
    HIDDEN = 'HIDDEN'
    CLOSED = 'CLOSED'
