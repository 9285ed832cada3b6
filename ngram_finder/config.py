import logging

from hydra import compose, initialize
from hydra.errors import InstantiationException
from hydra.utils import instantiate as hydra_instantiate
from omegaconf import OmegaConf

from ngram_finder.core.errors import InvalidParameterError

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    ConfigManager allows loading and reloading Hydra configs on the fly.
    Usage:
        config = ConfigManager()
        cfg = config.load(verbose=True)
        # ... later ...
        cfg = config.reload(["finder=flat_case"], verbose=True)
        finder = config.build_finder(["finder.threshold=0.5"])
    """
    def __init__(self, config_name="config", config_path="configs", overrides=None, version_base="1.3"):
        self.config_name = config_name
        self.config_path = config_path
        self.overrides = overrides or []
        self.version_base = version_base
        self._cfg = None

    def load(self, overrides=None, verbose=False):
        """Load configuration using Hydra"""
        overrides = list(overrides) if overrides is not None else self.overrides
        with initialize(version_base=self.version_base, config_path=self.config_path):
            self._cfg = compose(config_name=self.config_name, overrides=overrides)
            logger.debug(f"Composed '{self.config_name}' with overrides {overrides}")
            if verbose:
                print(OmegaConf.to_yaml(self._cfg))
            return self._cfg

    def reload(self, overrides=None, verbose=False):
        """Reload configuration using Hydra"""
        return self.load(overrides=overrides, verbose=verbose)

    def build_finder(self, overrides=None):
        """Instantiate the configured JaccardFinder (reloads when overrides are given)"""
        cfg = self.reload(overrides) if overrides is not None else self.cfg
        try:
            return hydra_instantiate(cfg.finder)
        except InstantiationException as e:
            # Hydra wraps constructor errors; surface bad parameters as such
            if isinstance(e.__cause__, InvalidParameterError):
                raise InvalidParameterError(str(e.__cause__)) from e
            raise

    @property
    def cfg(self):
        """Get the current config object (load if not loaded)"""
        if self._cfg is None:
            return self.load()
        return self._cfg
