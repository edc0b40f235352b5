from __future__ import annotations

import math

import matplotlib.pyplot as plt
import numpy as np

from source2d import JacobianConfig, SourceBlob, jacobian, plot_elements


def induced_velocity(elements, z: complex):
    """u + i v at z from regularized sources (works on dual scalars too)."""
    w = 0.0
    for e in elements:
        dz = z - e.position
        w = w + e.flux * dz / (2.0 * math.pi * (dz * dz.conjugate() + e.radius**2))
    return w


def main() -> None:
    rng = np.random.default_rng(0)
    n = 6
    z = rng.uniform(-0.5, 0.5, size=n) + 1j * rng.uniform(-0.5, 0.5, size=n)
    q = rng.normal(0.0, 1.0, size=n)
    blobs = [SourceBlob(complex(zi), float(qi), 0.05) for zi, qi in zip(z, q)]

    probes = 0.8 * np.exp(1j * np.linspace(0.0, 2.0 * np.pi, 24, endpoint=False))

    def probe_velocities(c):
        return [induced_velocity(c, complex(p)) for p in probes]

    res = jacobian(probe_velocities, blobs, config=JacobianConfig(order="element"))
    print(f"{res.matrix.shape[0]} outputs x {res.matrix.shape[1]} inputs")

    fig, (ax0, ax1) = plt.subplots(1, 2, figsize=(11.0, 5.0))
    plot_elements(blobs, ax=ax0)
    ax0.scatter(probes.real, probes.imag, s=8.0, c="black", marker=".")
    im = ax1.imshow(np.abs(res.matrix), aspect="auto", cmap="viridis")
    ax1.set_xticks(range(len(res.dofs)))
    ax1.set_xticklabels([f"{d.quantity}{d.index}" for d in res.dofs], rotation=90, fontsize=7)
    ax1.set_ylabel("probe")
    ax1.set_title("|d(u + i v) / d input|")
    fig.colorbar(im, ax=ax1, fraction=0.046, pad=0.04)
    plt.show()

if __name__ == "__main__":
    main()
