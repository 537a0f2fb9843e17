import dfaregex.errors
import dfaregex.config
import dfaregex.api

__all__ = ()


def _grab_all_from(module):
    global __all__
    for attr in module.__all__:
        globals()[attr] = getattr(module, attr)

    __all__ += module.__all__


_grab_all_from(dfaregex.errors)
_grab_all_from(dfaregex.config)
_grab_all_from(dfaregex.api)

del _grab_all_from
