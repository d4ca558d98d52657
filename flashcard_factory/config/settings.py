"""Global settings and configuration."""

from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass
class Config:
    """Application-wide configuration."""
    
    # Letter page in points (8.5in x 11in at 72 DPI)
    PAGE_WIDTH: float = 612.0
    PAGE_HEIGHT: float = 792.0
    MARGIN: float = 18.0  # 0.25in
    HEADER_HEIGHT: float = 30.0
    
    # Print grid
    COLUMNS_PER_PAGE: int = 2
    ROWS_PER_COLUMN: int = 4
    
    # Auto generator
    MAX_COUNT_PER_CATEGORY: int = 10
    GENERATION_DELAY: float = 1.5  # seconds, UX pause only
    GENERATED_LEVEL: str = "ISEE"
    DEFAULT_LEVEL: str = "medium"
    LEVELS: tuple = ("easy", "medium", "hard", "very hard", "ISEE")
    
    # Persistence
    STORAGE_KEY: str = "flashcard-sets"
    
    # Export
    EXPORT_FILENAME: str = "flashcards-double-sided.pdf"
    
    # Cross-platform paths using pathlib
    # BASE_DIR is the project root (parent of flashcard_factory/)
    BASE_DIR: Path = Path(__file__).parent.parent.parent.resolve()
    PACKAGE_DIR: Path = Path(__file__).parent.parent.resolve()
    
    WORD_BANK_FILE: str = str(PACKAGE_DIR / "data" / "word_bank.csv")
    DATA_DIR: str = str(BASE_DIR / "data")
    STORAGE_FILE: str = str(BASE_DIR / "data" / "flashcard_sets.json")
    OUTPUT_DIR: str = str(BASE_DIR / "data" / "output")
