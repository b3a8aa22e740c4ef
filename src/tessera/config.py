"""Configuration loading and defaults for Tessera."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .browser import ListOptions, SortBy, SortOrder
from .entries import IMAGE_EXTENSIONS
from .navigation import DEFAULT_ENTER_THRESHOLD


def get_config_dir() -> Path:
    """Get the tessera config directory (XDG-style)."""
    return Path.home() / ".config" / "tessera"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


def get_default_data_dir() -> Path:
    """Get the default data directory for the tag index."""
    return Path.home() / ".local" / "share" / "tessera"


@dataclass
class NavigationConfig:
    """Cursor and folder navigation behaviour."""

    enter_threshold: int = DEFAULT_ENTER_THRESHOLD
    wrap_navigation: bool = False
    skip_empty_siblings: bool = True
    history_limit: int = 0  # 0 = unbounded


@dataclass
class FilerConfig:
    """Folder listing configuration."""

    show_hidden_files: bool = False
    sort_by: str = SortBy.NAME.value
    sort_order: str = SortOrder.ASCENDING.value
    images_only: bool = False


def _parse_choice(value: object, choices: type, default: str) -> str:
    """Return ``value`` if it names a member of ``choices``, else ``default``."""
    allowed = {member.value for member in choices}
    return value if isinstance(value, str) and value in allowed else default


@dataclass
class Config:
    """Application configuration."""

    start_directory: Path = field(default_factory=Path.home)
    data_directory: Path = field(default_factory=get_default_data_dir)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    filer: FilerConfig = field(default_factory=FilerConfig)

    def get_tag_index_path(self) -> Path:
        """Get the JSON tag index path based on configured data directory."""
        return self.data_directory / "tags.json"

    def list_options(self) -> ListOptions:
        """Build directory listing options from the filer settings."""
        return ListOptions(
            show_hidden=self.filer.show_hidden_files,
            sort_by=SortBy(self.filer.sort_by),
            sort_order=SortOrder(self.filer.sort_order),
            filter_extensions=IMAGE_EXTENSIONS if self.filer.images_only else None,
        )

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file or create defaults."""
        config_path = get_config_path()

        # Ensure config directory exists
        config_dir = get_config_dir()
        config_dir.mkdir(parents=True, exist_ok=True)

        if not config_path.exists():
            # Create default config file
            default_config = cls()
            default_config.data_directory.mkdir(parents=True, exist_ok=True)
            default_config.save()
            return default_config

        # Load existing config
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        start_dir = data.get("start_directory", str(Path.home()))
        start_directory = Path(start_dir).expanduser()

        data_dir = data.get("data_directory", str(get_default_data_dir()))
        data_directory = Path(data_dir).expanduser()

        # Parse navigation config
        nav_data = data.get("navigation", {})
        navigation = NavigationConfig(
            enter_threshold=max(0, int(nav_data.get("enter_threshold", DEFAULT_ENTER_THRESHOLD))),
            wrap_navigation=bool(nav_data.get("wrap_navigation", False)),
            skip_empty_siblings=bool(nav_data.get("skip_empty_siblings", True)),
            history_limit=max(0, int(nav_data.get("history_limit", 0))),
        )

        # Parse filer config; unknown sort values fall back to defaults
        filer_data = data.get("filer", {})
        filer = FilerConfig(
            show_hidden_files=bool(filer_data.get("show_hidden_files", False)),
            sort_by=_parse_choice(filer_data.get("sort_by"), SortBy, SortBy.NAME.value),
            sort_order=_parse_choice(
                filer_data.get("sort_order"), SortOrder, SortOrder.ASCENDING.value
            ),
            images_only=bool(filer_data.get("images_only", False)),
        )

        config = cls(
            start_directory=start_directory,
            data_directory=data_directory,
            navigation=navigation,
            filer=filer,
        )

        # Ensure data directory exists
        config.data_directory.mkdir(parents=True, exist_ok=True)

        return config

    def save(self) -> None:
        """Save configuration to file."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        # Build TOML content manually (tomllib is read-only)
        lines = [
            '# Tessera Configuration',
            '',
            '# Folder opened at startup',
            f'start_directory = "{self.start_directory}"',
            '',
            '# Directory for the tag index (tags.json)',
            '# Default: ~/.local/share/tessera',
            f'data_directory = "{self.data_directory}"',
            '',
            '[navigation]',
            '# Folders with at most this many files open straight in the viewer',
            f'enter_threshold = {self.navigation.enter_threshold}',
            f'wrap_navigation = {str(self.navigation.wrap_navigation).lower()}',
            f'skip_empty_siblings = {str(self.navigation.skip_empty_siblings).lower()}',
            f'history_limit = {self.navigation.history_limit}  # 0 = unbounded',
            '',
            '[filer]',
            f'show_hidden_files = {str(self.filer.show_hidden_files).lower()}',
            f'sort_by = "{self.filer.sort_by}"  # name, size, modified, extension',
            f'sort_order = "{self.filer.sort_order}"  # ascending, descending',
            f'images_only = {str(self.filer.images_only).lower()}',
        ]

        config_path.write_text("\n".join(lines) + "\n")
