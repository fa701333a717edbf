"""
Centralized settings and path configuration for the price preview service.
"""
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 4 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""
    
    # Project paths
    project_root: Path
    data_dir: Path
    
    # Modifier catalog files (one per modifier kind)
    promotions_csv: Path
    discounts_csv: Path
    taxes_csv: Path
    
    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    
    # Streamlit preview screen
    ui_port: int = 8501
    
    # Status value the backend uses for selectable modifiers
    active_status: str = "active"
    
    @classmethod
    def load(cls, project_root: Optional[Path] = None, data_dir: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure."""
        root = project_root or get_project_root()
        data = data_dir or Path(__file__).resolve().parent.parent / 'data'
        
        return cls(
            project_root=root,
            data_dir=data,
            promotions_csv=data / 'promotions.csv',
            discounts_csv=data / 'discounts.csv',
            taxes_csv=data / 'taxes.csv',
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
