from contrail_anon.app import ContrailAnonApp
from contrail_anon.version import __version__
