"""Config detector engine — ADK configuration signals from manifests and env files."""

from adkdetect.engines.config_detector.detector import AdkConfigDetector, enrich
from adkdetect.engines.config_detector.models import ConfigFileInfo, ConfigInfo, ConfigType

__all__ = ["AdkConfigDetector", "ConfigFileInfo", "ConfigInfo", "ConfigType", "enrich"]
