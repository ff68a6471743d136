"""
Kepler's equation solver.
"""
from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import jit

from .constants import KEPLER_TOL, KEPLER_MAX_ITER, KEPLER_HIGH_ECC


class KeplerSolution(NamedTuple):
    """
    Result of solving Kepler's equation.

    Attributes:
        E: Best available eccentric anomaly (radians)
        converged: True if the last Newton correction fell below the tolerance
        iterations: Number of Newton updates performed
        residual: E - e*sin(E) - M at the returned E, evaluated within one
            revolution so it is not swamped by rounding of large M (radians)

    Note:
        - When the iteration cap is reached, E is still the best estimate and
          callers may use it; `converged` tells them the precision is degraded.
    """
    E: jnp.ndarray
    converged: jnp.ndarray
    iterations: jnp.ndarray
    residual: jnp.ndarray


class KeplerConvergenceError(RuntimeError):
    """Raised when a caller requires convergence and the iteration cap was hit."""


@jit
def solve_kepler(M: float, e: float, tol: float = KEPLER_TOL,
                 max_iter: int = KEPLER_MAX_ITER) -> KeplerSolution:
    """
    Solve Kepler's equation M = E - e*sin(E) for eccentric anomaly E
    using Newton-Raphson iteration.

    M is first reduced to [0, 2*pi) and the whole revolutions are added back
    to the result, so the tolerance stays reachable far from the epoch. The
    iteration starts from E = M and stops as soon as the magnitude of a
    correction is below `tol`, or after `max_iter` corrections. For e >= 0.8
    the start is pi, where Newton converges for any mean anomaly.

    Parameters
    ----------
    M : float
        Mean anomaly (radians). Any real value.
    e : float
        Eccentricity, 0 <= e < 1.
    tol : float, optional
        Convergence tolerance on the Newton correction (radians).
    max_iter : int, optional
        Maximum number of Newton corrections.

    Returns
    -------
    KeplerSolution
        The eccentric anomaly together with its convergence diagnostics.
    """
    M = jnp.asarray(M, dtype=float)
    e = jnp.asarray(e, dtype=float)

    two_pi = 2.0 * jnp.pi
    revs = jnp.floor(M / two_pi)
    M_red = M - revs * two_pi

    E0 = jnp.where(e < KEPLER_HIGH_ECC, M_red, jnp.pi)

    def cond_fn(carry):
        _, delta, k = carry
        return (k < max_iter) & ~(jnp.abs(delta) < tol)

    def body_fn(carry):
        E, _, k = carry
        delta = (E - e * jnp.sin(E) - M_red) / (1.0 - e * jnp.cos(E))
        return E - delta, delta, k + 1

    E, delta, k = jax.lax.while_loop(cond_fn, body_fn, (E0, jnp.full_like(M, jnp.inf), jnp.int32(0)))

    return KeplerSolution(
        E=E + revs * two_pi,
        converged=jnp.abs(delta) < tol,
        iterations=k,
        residual=E - e * jnp.sin(E) - M_red,
    )


def eccentric_anomaly(M: float, e: float) -> jnp.ndarray:
    """Best-estimate eccentric anomaly with the default solver settings."""
    return solve_kepler(M, e).E


# Vectorized version using vmap
# Note: vmap over first two arguments (M and e arrays), broadcast tol and max_iter
_solve_kepler_vec = jax.vmap(solve_kepler, in_axes=(0, 0, None, None))


def solve_kepler_vec(M, e, tol=KEPLER_TOL, max_iter=KEPLER_MAX_ITER) -> KeplerSolution:
    """
    Vectorized version of solve_kepler that handles arrays of M and e.

    Parameters
    ----------
    M : jnp.ndarray
        Array of mean anomalies (radians)
    e : jnp.ndarray
        Array of eccentricities
    tol : float, optional
        Tolerance for convergence
    max_iter : int, optional
        Maximum number of iterations

    Returns
    -------
    KeplerSolution
        Fields are arrays with the shape of M.
    """
    M = jnp.asarray(M, dtype=float)
    e = jnp.asarray(e, dtype=float)
    return _solve_kepler_vec(M, e, tol, max_iter)
