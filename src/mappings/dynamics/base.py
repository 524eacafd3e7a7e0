"""
Base classes for dynamical system mappings.

Four abstract base classes describe the right-hand side of ordinary
differential equations or discrete maps:

- Non-autonomous, exogenous:  dx/dt = f(t, x(t), u(t))  or  x[i+1] = f(i, x[i], u[i])
- Autonomous, exogenous:      dx/dt = f(x(t), u(t))     or  x[i+1] = f(x[i], u[i])
- Autonomous, endogenous:     dx/dt = f(x(t))           or  x[i+1] = f(x[i])
- Non-autonomous, endogenous: dx/dt = f(t, x(t))        or  x[i+1] = f(i, x[i])

Autonomous means the mapping does not depend explicitly on the independent
variable; for continuous time systems this is analogous to time-invariant.
Non-autonomous means it does (time-varying). Exogenous means there are
external inputs that are not explained by the model. Endogenous is the
opposite: no external inputs affect the mapping.

All four classes assume the mapping depends on the state. Models that depend
only on the independent variable or only on inputs are not covered.

Concrete models subclass exactly one of the variants and implement
``compute_rhs``, which writes the right-hand side into a caller-supplied
buffer. Calling a model checks the buffers against the model's fixed
dimensions before dispatching to ``compute_rhs``.
"""

import warnings
from abc import ABC, abstractmethod
from numbers import Number
from typing import Optional, Type, Union

import numpy as np
import torch


ArrayLike = Union[torch.Tensor, np.ndarray]
IndependentVariable = Union[int, float, torch.Tensor]


def _as_tensor(value, what: str) -> torch.Tensor:
    """Wrap ndarrays without copying so writes reach the caller's buffer."""
    if isinstance(value, torch.Tensor):
        return value
    if isinstance(value, np.ndarray):
        return torch.from_numpy(value)
    raise TypeError(
        f"{what} must be a torch.Tensor or numpy.ndarray, got {type(value).__name__}"
    )


def _check_dim(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be a non-negative integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{what} must be a non-negative integer, got {value}")
    return value


def _memory_span(tensor: torch.Tensor):
    start = tensor.data_ptr()
    if tensor.numel() == 0:
        return start, start
    extent = 1 + sum((size - 1) * stride for size, stride in zip(tensor.shape, tensor.stride()))
    return start, start + extent * tensor.element_size()


def _shares_memory(a: torch.Tensor, b: torch.Tensor) -> bool:
    a_start, a_end = _memory_span(a)
    b_start, b_end = _memory_span(b)
    if not (a_start < b_end and b_start < a_end):
        return False
    # Byte ranges overlap; strided views may still be disjoint
    if a.device.type == "cpu" and b.device.type == "cpu":
        try:
            return bool(np.shares_memory(a.detach().numpy(), b.detach().numpy()))
        except TypeError:
            # dtypes numpy cannot represent, such as bfloat16
            return True
    return True


class Mapping(ABC):
    """
    Common base of the four mapping variants.

    Holds the fixed state dimension N and input dimension M of a model and
    the checks every variant runs before evaluating. Do not subclass this
    directly; pick one of the four variants (see ``mapping_base``).

    Parameters:
    -----------
    state_dim : int
        Dimension N of the state space. Fixed for the lifetime of the model.
    input_dim : int
        Dimension M of the exogenous inputs. Must be 0 for endogenous variants.
    name : str, optional
        Human-readable identifier. Defaults to the class name.
    """

    autonomous: bool
    exogenous: bool

    def __init__(self, state_dim: int, input_dim: int = 0, name: Optional[str] = None):
        self._state_dim = _check_dim(state_dim, "state_dim")
        self._input_dim = _check_dim(input_dim, "input_dim")
        if not self.exogenous and self._input_dim != 0:
            raise ValueError("endogenous mappings take no inputs; input_dim must be 0")
        if name is None:
            name = type(self).__name__
        if not isinstance(name, str) or len(name.strip()) == 0:
            raise ValueError("name must be a non-empty string")
        self._name = name

    @abstractmethod
    def compute_rhs(self, *args) -> None:
        """Write the right-hand side into the output buffer; see the variants for signatures."""

    @property
    def state_dim(self) -> int:
        return self._state_dim

    @property
    def input_dim(self) -> int:
        return self._input_dim

    @property
    def name(self) -> str:
        return self._name

    def _check_state(self, x: ArrayLike) -> torch.Tensor:
        x = _as_tensor(x, "state")
        if x.dim() == 0 or x.shape[-1] != self._state_dim:
            raise ValueError(
                f"{self.name} expects states with last dim {self._state_dim}, "
                f"got shape {tuple(x.shape)}"
            )
        return x

    def _check_input(self, u: ArrayLike, x: torch.Tensor) -> torch.Tensor:
        u = _as_tensor(u, "input")
        if u.dim() == 0 or u.shape[-1] != self._input_dim:
            raise ValueError(
                f"{self.name} expects inputs with last dim {self._input_dim}, "
                f"got shape {tuple(u.shape)}"
            )
        try:
            batch = torch.broadcast_shapes(x.shape[:-1], u.shape[:-1])
        except RuntimeError as exc:
            raise ValueError(
                f"input batch shape {tuple(u.shape[:-1])} does not broadcast against "
                f"state batch shape {tuple(x.shape[:-1])}"
            ) from exc
        if batch != x.shape[:-1]:
            raise ValueError(
                f"input batch shape {tuple(u.shape[:-1])} would enlarge "
                f"state batch shape {tuple(x.shape[:-1])}"
            )
        if u.dtype != x.dtype:
            warnings.warn(
                f"input dtype {u.dtype} differs from state dtype {x.dtype}; "
                f"the right-hand side is stored as {x.dtype}"
            )
        return u

    @staticmethod
    def _check_independent_variable(t) -> IndependentVariable:
        if t is None:
            raise ValueError("non-autonomous mappings require a value for the independent variable")
        if isinstance(t, np.ndarray):
            t = torch.from_numpy(t)
        if not isinstance(t, (Number, torch.Tensor)):
            raise TypeError(
                f"independent variable must be a number or torch.Tensor, got {type(t).__name__}"
            )
        if isinstance(t, torch.Tensor):
            if t.numel() != 1:
                raise ValueError(
                    f"independent variable must be a scalar, got shape {tuple(t.shape)}"
                )
            t = t.reshape(())
        return t

    def _prepare_output(self, out: Optional[ArrayLike], x: torch.Tensor, *readonly) -> torch.Tensor:
        """Allocate the right-hand side buffer or check a caller-supplied one."""
        if out is None:
            return torch.empty_like(x)
        rhs = _as_tensor(out, "output buffer")
        if rhs.shape != x.shape:
            raise ValueError(
                f"output buffer must match the state shape {tuple(x.shape)}, "
                f"got {tuple(rhs.shape)}"
            )
        if rhs.dtype != x.dtype:
            raise ValueError(f"output buffer dtype {rhs.dtype} does not match state dtype {x.dtype}")
        if rhs.device != x.device:
            raise ValueError(f"output buffer is on {rhs.device}, state is on {x.device}")
        for other in (x,) + readonly:
            if _shares_memory(rhs, other):
                raise ValueError("output buffer must not share memory with the state or inputs")
        return rhs

    @staticmethod
    def _result(x: ArrayLike, out: Optional[ArrayLike], rhs: torch.Tensor) -> ArrayLike:
        if out is not None:
            return out
        if isinstance(x, np.ndarray):
            return rhs.numpy()
        return rhs

    def __str__(self) -> str:
        if self.exogenous:
            return f"{self.name}(N={self._state_dim}, M={self._input_dim})"
        return f"{self.name}(N={self._state_dim})"

    def __repr__(self) -> str:
        return self.__str__()


class MappingNonAutonomousExogenous(Mapping):
    """
    Abstract base for non-autonomous systems with exogenous inputs.

    Subclass this to model a system described by ODEs of the form
    dx/dt = f(t, x(t), u(t)) or discrete maps x[i+1] = f(i, x[i], u[i]).
    """

    autonomous = False
    exogenous = True

    def __init__(self, state_dim: int, input_dim: int, name: Optional[str] = None):
        super().__init__(state_dim, input_dim, name)

    @abstractmethod
    def compute_rhs(self, t: IndependentVariable, x: torch.Tensor, u: torch.Tensor, rhs: torch.Tensor) -> None:
        """
        Compute the right-hand side f(t, x, u) and write it into ``rhs``.

        Parameters:
        -----------
        t : int, float or torch.Tensor
            Independent variable; typically time (ODEs) or index (maps).
        x : torch.Tensor
            States of shape (..., N). Must not be modified.
        u : torch.Tensor
            Exogenous inputs of shape (..., M). Must not be modified.
        rhs : torch.Tensor
            Output buffer of shape (..., N). Every slot must be written.
        """

    def __call__(self, t: IndependentVariable, x: ArrayLike, u: ArrayLike, out: Optional[ArrayLike] = None) -> ArrayLike:
        t = self._check_independent_variable(t)
        x_t = self._check_state(x)
        u_t = self._check_input(u, x_t)
        rhs = self._prepare_output(out, x_t, u_t)
        self.compute_rhs(t, x_t, u_t, rhs)
        return self._result(x, out, rhs)


class MappingAutonomousExogenous(Mapping):
    """
    Abstract base for autonomous systems with exogenous inputs.

    Subclass this to model a system described by ODEs of the form
    dx/dt = f(x(t), u(t)) or discrete maps x[i+1] = f(x[i], u[i]).
    """

    autonomous = True
    exogenous = True

    def __init__(self, state_dim: int, input_dim: int, name: Optional[str] = None):
        super().__init__(state_dim, input_dim, name)

    @abstractmethod
    def compute_rhs(self, x: torch.Tensor, u: torch.Tensor, rhs: torch.Tensor) -> None:
        """
        Compute the right-hand side f(x, u) and write it into ``rhs``.

        Parameters:
        -----------
        x : torch.Tensor
            States of shape (..., N). Must not be modified.
        u : torch.Tensor
            Exogenous inputs of shape (..., M). Must not be modified.
        rhs : torch.Tensor
            Output buffer of shape (..., N). Every slot must be written.
        """

    def __call__(self, x: ArrayLike, u: ArrayLike, out: Optional[ArrayLike] = None) -> ArrayLike:
        x_t = self._check_state(x)
        u_t = self._check_input(u, x_t)
        rhs = self._prepare_output(out, x_t, u_t)
        self.compute_rhs(x_t, u_t, rhs)
        return self._result(x, out, rhs)


class MappingAutonomousEndogenous(Mapping):
    """
    Abstract base for autonomous systems without external inputs.

    Subclass this to model a system described by ODEs of the form
    dx/dt = f(x(t)) or discrete maps x[i+1] = f(x[i]).
    """

    autonomous = True
    exogenous = False

    def __init__(self, state_dim: int, name: Optional[str] = None):
        super().__init__(state_dim, 0, name)

    @abstractmethod
    def compute_rhs(self, x: torch.Tensor, rhs: torch.Tensor) -> None:
        """
        Compute the right-hand side f(x) and write it into ``rhs``.

        Parameters:
        -----------
        x : torch.Tensor
            States of shape (..., N). Must not be modified.
        rhs : torch.Tensor
            Output buffer of shape (..., N). Every slot must be written.
        """

    def __call__(self, x: ArrayLike, out: Optional[ArrayLike] = None) -> ArrayLike:
        x_t = self._check_state(x)
        rhs = self._prepare_output(out, x_t)
        self.compute_rhs(x_t, rhs)
        return self._result(x, out, rhs)


class MappingNonAutonomousEndogenous(Mapping):
    """
    Abstract base for non-autonomous systems without external inputs.

    Subclass this to model a system described by ODEs of the form
    dx/dt = f(t, x(t)) or discrete maps x[i+1] = f(i, x[i]).
    """

    autonomous = False
    exogenous = False

    def __init__(self, state_dim: int, name: Optional[str] = None):
        super().__init__(state_dim, 0, name)

    @abstractmethod
    def compute_rhs(self, t: IndependentVariable, x: torch.Tensor, rhs: torch.Tensor) -> None:
        """
        Compute the right-hand side f(t, x) and write it into ``rhs``.

        Parameters:
        -----------
        t : int, float or torch.Tensor
            Independent variable; typically time (ODEs) or index (maps).
        x : torch.Tensor
            States of shape (..., N). Must not be modified.
        rhs : torch.Tensor
            Output buffer of shape (..., N). Every slot must be written.
        """

    def __call__(self, t: IndependentVariable, x: ArrayLike, out: Optional[ArrayLike] = None) -> ArrayLike:
        t = self._check_independent_variable(t)
        x_t = self._check_state(x)
        rhs = self._prepare_output(out, x_t)
        self.compute_rhs(t, x_t, rhs)
        return self._result(x, out, rhs)


_VARIANTS = {
    (True, True): MappingNonAutonomousExogenous,
    (False, True): MappingAutonomousExogenous,
    (False, False): MappingAutonomousEndogenous,
    (True, False): MappingNonAutonomousEndogenous,
}


def mapping_base(nonautonomous: bool, exogenous: bool) -> Type[Mapping]:
    """
    Return the base class for a system with the given properties.

    Parameters:
    -----------
    nonautonomous : bool
        Whether the right-hand side depends explicitly on time or index.
    exogenous : bool
        Whether external inputs affect the right-hand side.

    Returns:
    --------
    type
        One of the four mapping variants.

    Example:
    --------
    >>> class Decay(mapping_base(nonautonomous=False, exogenous=False)):
    ...     def __init__(self):
    ...         super().__init__(state_dim=1)
    ...     def compute_rhs(self, x, rhs):
    ...         rhs[..., 0] = -x[..., 0]
    """
    return _VARIANTS[(bool(nonautonomous), bool(exogenous))]


def _variant_of(mapping) -> Type[Mapping]:
    cls = mapping if isinstance(mapping, type) else type(mapping)
    for variant in _VARIANTS.values():
        if issubclass(cls, variant):
            return variant
    raise TypeError(f"{cls.__name__} is not one of the four mapping variants")


def is_autonomous(mapping) -> bool:
    """Whether a mapping (instance or class) ignores the independent variable."""
    return _variant_of(mapping).autonomous


def is_exogenous(mapping) -> bool:
    """Whether a mapping (instance or class) takes exogenous inputs."""
    return _variant_of(mapping).exogenous
