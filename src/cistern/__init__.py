"""cistern - Reconcile cloud storage containers against declared configuration."""

from .config import ContainerConfig as ContainerConfig
from .config import Environment as Environment
from .container import StorageContainer as StorageContainer
from .context import Context as Context
from .engine import ContainerEngine as ContainerEngine
from .engine import ReconcileOutcome as ReconcileOutcome
from .engine import ResourceState as ResourceState
from .identity import ResourceIdentity as ResourceIdentity
from .migrate import migrate_state as migrate_state
from .retry import RetryScheduler as RetryScheduler
from .spec import Specification as Specification
from .spec import spec as spec
from .specop import Absent as Absent
from .specop import Ensure as Ensure
from .specop import Present as Present
from .specop import SpecOp as SpecOp
from .validation import AccessType as AccessType
