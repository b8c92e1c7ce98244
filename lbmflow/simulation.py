"""
Simulation Loop

Time marching of a block lattice with periodic snapshots.

The loop is a two-state machine. While RUNNING, each transition checks
the stop predicate on the current step index, exports the velocity norm
if the export predicate holds, then advances the lattice by one
collide-and-stream step. Once the stop predicate holds the loop is DONE.

Frames are named from the step index, ``u000040`` for step 40.
"""

import math
from enum import Enum

from visualization.image_writer import create_file_name

FRAME_PREFIX = "u"
FRAME_NUMBER_WIDTH = 6


class LoopState(Enum):
    RUNNING = "running"
    DONE = "done"


def max_iterations(max_iter):
    """Stop once ``max_iter`` steps have been taken."""
    if max_iter < 0:
        raise ValueError(f"max_iter must be >= 0, got {max_iter}")
    return lambda step: step >= max_iter


def max_physical_time(delta_t, max_t):
    """Stop once ``step * delta_t`` reaches ``max_t``."""
    if not delta_t > 0:
        raise ValueError(f"delta_t must be > 0, got {delta_t}")
    if not max_t > 0:
        raise ValueError(f"max_t must be > 0, got {max_t}")
    return lambda step: step * delta_t >= max_t


def every_n_steps(n):
    """Export on every ``n``-th step, starting with step 0."""
    if n < 1:
        raise ValueError(f"Export cadence must be >= 1, got {n}")
    return lambda step: step % n == 0


def every_time_interval(n_step):
    """Export every ``n_step`` steps, never on step 0."""
    if n_step < 1:
        raise ValueError(f"Export cadence must be >= 1, got {n_step}")
    return lambda step: step > 0 and step % n_step == 0


class SimulationLoop:
    """
    Drive a lattice until a stop predicate holds.

    Parameters
    ----------
    lattice : BlockLattice2D
        Anything with ``collide_and_stream()`` and ``compute_velocity_norm()``
    should_stop : callable
        ``should_stop(step) -> bool``
    should_export : callable
        ``should_export(step) -> bool``
    image_writer : ImageWriter, optional
        Receives ``write_scaled_gif(name, field, width, height)``; without
        one no snapshots are taken
    image_size : tuple of int, optional
        ``(width, height)`` of the exported images
    verbose : bool
        Print a line for every written frame
    """

    def __init__(self, lattice, should_stop, should_export, image_writer=None,
                 image_size=None, verbose=True):
        self.lattice = lattice
        self.should_stop = should_stop
        self.should_export = should_export
        self.image_writer = image_writer
        self.image_size = image_size
        self.verbose = verbose

        self.step = 0
        self.frames = []
        self.state = LoopState.RUNNING

    def export_frame(self):
        name = create_file_name(FRAME_PREFIX, self.step, FRAME_NUMBER_WIDTH)
        if self.verbose:
            print(f"Writing GIF file at iT={self.step}")

        width, height = self.image_size if self.image_size else (None, None)
        self.image_writer.write_scaled_gif(
            name, self.lattice.compute_velocity_norm(), width, height
        )
        self.frames.append(name)

    def advance(self):
        """
        One transition of the loop.

        Returns
        -------
        state : LoopState
            State after the transition
        """
        if self.state is LoopState.DONE:
            return self.state

        if self.should_stop(self.step):
            self.state = LoopState.DONE
            return self.state

        if self.image_writer is not None and self.should_export(self.step):
            self.export_frame()

        self.lattice.collide_and_stream()
        self.step += 1

        return self.state

    def run(self):
        """
        Advance until DONE.

        Returns
        -------
        steps : int
            Number of lattice steps taken
        """
        while self.advance() is LoopState.RUNNING:
            pass
        return self.step


def iteration_loop(lattice, max_iter, save_every, image_writer=None, **kwargs):
    """
    Loop for a fixed number of iterations, exporting every ``save_every``
    steps from step 0 on.

    ``ceil(max_iter / save_every)`` frames are written.
    """
    return SimulationLoop(
        lattice,
        should_stop=max_iterations(max_iter),
        should_export=every_n_steps(save_every),
        image_writer=image_writer,
        **kwargs
    )


def physical_time_loop(lattice, parameters, max_t, save_interval,
                       image_writer=None, **kwargs):
    """
    Loop until the dimensionless time ``max_t`` is reached, exporting
    every ``save_interval`` time units (not at t = 0).

    Parameters
    ----------
    lattice : BlockLattice2D
    parameters : FlowParameters
        Supplies the time step and the step count of ``save_interval``
    max_t : float
        Dimensionless end time
    save_interval : float
        Dimensionless time between frames
    """
    return SimulationLoop(
        lattice,
        should_stop=max_physical_time(parameters.delta_t, max_t),
        should_export=every_time_interval(parameters.n_step(save_interval)),
        image_writer=image_writer,
        **kwargs
    )


def expected_frame_count(max_iter, save_every):
    """Frames written by :func:`iteration_loop`."""
    return math.ceil(max_iter / save_every)
