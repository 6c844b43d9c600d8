"""Base formatter class for run and suite output."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from dstest.exceptions import FormatterError


class BaseFormatter(ABC):
    """Abstract base class for formatters."""
    
    def __init__(self, output_path: Optional[Path] = None):
        """Initialize formatter.
        
        Args:
            output_path: Optional output file path
        """
        self.output_path = Path(output_path) if output_path else None
    
    @abstractmethod
    def format(self, obj: Any) -> str:
        """Format an object to the output format.
        
        Args:
            obj: Test run or test suite
            
        Returns:
            Formatted output as string
        """
        pass
    
    def write(self, obj: Any) -> None:
        """Write formatted output to file.
        
        Args:
            obj: Object to format and write
            
        Raises:
            FormatterError: If writing fails
        """
        if not self.output_path:
            raise FormatterError("No output path specified")
        
        formatted = self.format(obj)
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(formatted, encoding="utf-8")
        except OSError as e:
            raise FormatterError(f"Failed to write output: {e}") from e
