from strategy_advisor.config.settings import AdvisorConfig, load_config

__all__ = ['AdvisorConfig', 'load_config']
