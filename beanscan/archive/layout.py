import re
from dataclasses import dataclass

from beanscan.config import ScanConfig


@dataclass(frozen=True)
class ArchiveLayout:
    marker_name: str = "beans.xml"
    class_suffix: str = ".class"

    @classmethod
    def from_config(cls, config: ScanConfig) -> "ArchiveLayout":
        return cls(
            marker_name=config.marker_name,
            class_suffix=config.class_suffix,
        )

    @property
    def library_metadata_dir(self) -> str:
        return "/META-INF"

    @property
    def web_inf_dir(self) -> str:
        return "/WEB-INF"

    @property
    def web_classes_dir(self) -> str:
        return f"{self.web_inf_dir}/classes"

    @property
    def web_lib_dir(self) -> str:
        return f"{self.web_inf_dir}/lib"

    @property
    def library_marker(self) -> str:
        return f"{self.library_metadata_dir}/{self.marker_name}"

    @property
    def web_marker(self) -> str:
        return f"{self.web_inf_dir}/{self.marker_name}"

    @property
    def web_classes_marker(self) -> str:
        # marker placed directly inside the compiled-classes root
        return f"{self.web_classes_dir}{self.library_marker}"

    def web_marker_patterns(self) -> list[str]:
        return [
            re.escape(self.web_marker),
            re.escape(self.web_classes_marker),
        ]

    def library_marker_pattern(self) -> str:
        return re.escape(self.library_marker)

    def class_pattern(self) -> str:
        return ".*" + re.escape(self.class_suffix)

    def web_library_pattern(self) -> str:
        return re.escape(self.web_lib_dir + "/") + r".*\.jar"
