"""Export job and result models"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Union

from ..constants import ExportMode, PackageFormat


@dataclass
class ExportJob:
    """One export run; owns its staging directory exclusively"""

    staging_dir: Path
    output_dir: Path
    mode: ExportMode = ExportMode.ONLINE
    package_format: PackageFormat = PackageFormat.RAM

    def __post_init__(self):
        """Normalize paths and enum values"""
        if isinstance(self.staging_dir, str):
            self.staging_dir = Path(self.staging_dir)
        if isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)
        if isinstance(self.mode, str):
            self.mode = ExportMode(self.mode.lower())
        if isinstance(self.package_format, str):
            self.package_format = PackageFormat(self.package_format.lower())

    @property
    def is_offline(self) -> bool:
        return self.mode == ExportMode.OFFLINE

    @classmethod
    def create(cls,
               output_dir: Union[str, Path],
               app_name: str,
               mode: Union[str, ExportMode] = ExportMode.ONLINE,
               package_format: Union[str, PackageFormat] = PackageFormat.RAM) -> 'ExportJob':
        """Create a job whose staging directory sits inside the output directory"""
        output_dir = Path(output_dir)
        return cls(
            staging_dir=output_dir / app_name,
            output_dir=output_dir,
            mode=mode,
            package_format=package_format,
        )


@dataclass(frozen=True)
class ExportResult:
    """Result of a successful export"""

    package_path: Path
    package_name: str

    @property
    def package_size(self) -> int:
        return self.package_path.stat().st_size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package_path": str(self.package_path),
            "package_name": self.package_name,
        }
