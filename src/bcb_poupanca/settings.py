from bcb_poupanca.hooks import DataObservabilityHooks

HOOKS = (DataObservabilityHooks(),)
