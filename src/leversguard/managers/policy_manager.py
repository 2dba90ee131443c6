# src/leversguard/managers/policy_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from leversguard.policy import Policy, resolve_policy
from leversguard.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class PolicyManager:
    """
    Loads the optional project policy file and resolves it against the defaults.

    A missing file is the normal case. An unreadable or malformed file is logged
    and treated as missing, it never stops a scan.
    """

    def __init__(self, project_root: Union[str, Path, None] = None, policy_file: Union[str, Path, None] = None):
        if policy_file is not None:
            self.policy_file: Optional[Path] = Path(policy_file)
        elif project_root is not None:
            self.policy_file = PathUtils.get_policy_file(Path(project_root))
        else:
            self.policy_file = None

    def load_raw(self) -> Dict[str, Any]:
        """Reads the policy file as a raw dict. Returns {} on any problem."""
        if self.policy_file is None or not self.policy_file.exists():
            logger.debug("No policy file found (%s). Using defaults.", self.policy_file)
            return {}
        try:
            with open(self.policy_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Could not read policy file %s: %s", self.policy_file, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Policy file %s does not contain a JSON object. Ignored.", self.policy_file)
            return {}
        return data

    def resolve(self) -> Policy:
        return resolve_policy(self.load_raw())
