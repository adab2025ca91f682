from src.utils import ConfigLoader

config_loader = ConfigLoader()
config = config_loader.load()
