from pathlib import Path
from typing import Dict, Optional

from contrail_anon.anonymise.ip_mask import IpMask
from contrail_anon.common.constants import CONFIG_KEYS, DEFAULT_PROGRESS_EVERY
from contrail_anon.common.dto import RunOptions
from contrail_anon.common.utils import exception_handler, read_yaml
from contrail_anon.logger import logger_set_run_dir, logger_set_verbose, get_logger


class Context:
    @exception_handler
    def __init__(self, options: RunOptions):
        self.options = options
        self.config: Dict = self._read_config(options.config)
        self.logger = None
        self.setup_logger()

        self.progress_every: int = self.config.get("progress-every", DEFAULT_PROGRESS_EVERY)
        if isinstance(self.progress_every, bool) or not isinstance(self.progress_every, int) or self.progress_every <= 0:
            raise ValueError(f"Config incorrect. progress-every must be a positive integer, got {self.progress_every!r}")

        # Drawn once, before any table is processed, and shared by both of them
        ip_mask = self.config.get("ip-mask")
        self.ip_mask: IpMask = IpMask.from_list(ip_mask) if ip_mask is not None else IpMask.generate()

    @staticmethod
    def _read_config(config_path: Optional[str]) -> Dict:
        if not config_path:
            return {}

        config = read_yaml(config_path) or {}
        if not isinstance(config, dict):
            raise ValueError("Config incorrect. Must be a mapping")

        unknown_keys = set(config) - set(CONFIG_KEYS)
        if unknown_keys:
            raise ValueError(f"Config incorrect. Unknown keys: {', '.join(sorted(map(str, unknown_keys)))}")

        ip_mask = config.get("ip-mask")
        if ip_mask is not None and not isinstance(ip_mask, list):
            raise ValueError("Config incorrect. ip-mask must be a list of 3 integers")

        return config

    def setup_logger(self):
        logger_set_run_dir(Path(self.options.run_dir))
        logger_set_verbose(self.options.verbose)
        self.logger = get_logger()
