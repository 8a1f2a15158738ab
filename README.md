# slosh

Building blocks for a two-dimensional incompressible flow solver with a free
surface. They are meant for studying liquid sloshing in partially filled
tanks on a staggered marker-and-cell grid.

All fields are numpy arrays indexed `field[i, j]`, with `i` along x and `j`
along y. Cell types are stored as bit flags in an integer field.

## Installation

```
pip install .
```

The only runtime dependency is numpy.

## Modules

- `slosh.params`: `find_string`, `read_string`, `read_int` and `read_double`
  read named values from a plain-text parameter file, one `name value` pair
  per line, with `#` starting a comment. Each reader echoes the value it read
  to standard output. Malformed or missing entries raise `ParameterError`.
- `slosh.fields`: `new_field` and `new_flag_field` create filled float and
  integer fields; `write_matrix` and `read_matrix` store and load a field as
  single-precision binary values; `read_pgm` reads an ASCII PGM image into an
  integer field, the first image row becoming the top row. Bad images raise
  `PgmError`.
- `slosh.boundary`: the `Cell` flag bits (fluid, no-slip, free-slip, inflow,
  outflow, empty, interior, surface and the side bits), the `b_*` tests for
  which sides of an obstacle cell border fluid, `boundary_values` for the
  no-slip, free-slip and outflow conditions, and `special_boundary_values`
  for a unit inflow velocity.
- `slosh.uvp`: `calculate_dt` (stable time step), `calculate_fg` (momentum
  predictor with a donor-cell blend), `calculate_rs` (right-hand side of the
  pressure equation), `calculate_uv` (pressure correction),
  `nullify_obstacles`, `set_gravity` (lateral acceleration for problems 1 to 8
  during the first three seconds), and the diagnostics `force_x`, `force_y`
  and `kinetic_energy`.
- `slosh.particles`: `ParticleLine`, `init_particles` and `insert_particles`
  to seed marker particles, `mark_cells` to reclassify cells as fluid,
  surface, interior or empty from the particles and to mark obstacle faces,
  `u_interp` and `v_interp` for bilinear velocity interpolation,
  `advance_particles` for an explicit Euler step and `delete_particles` to
  drop particles inside walls.
- `slosh.freesurface`: the `s_*` tests for which sides of a cell border empty
  cells, and `set_uvp_surface` for the velocity and pressure conditions on
  the free surface.
- `slosh.vtk`: `write_vtk_file` writes velocity and pressure as a legacy
  ASCII structured grid to `<prefix>.<step>.vtk`; `write_vtk_particle_file`
  writes the visible particles to `<prefix>.particle.<step>.vtk`. Both return
  the path they wrote.

## Example

```python
from slosh.boundary import Cell, boundary_values
from slosh.fields import new_field, new_flag_field
from slosh.particles import init_particles, mark_cells
from slosh.uvp import calculate_dt
from slosh.vtk import write_vtk_file

imax, jmax = 12, 8
dx = dy = 0.5

flag = new_flag_field(imax, jmax, int(Cell.NO_SLIP))
flag[1:-1, 1:4] = int(Cell.FLUID)
flag[1:-1, 4:-1] = int(Cell.EMPTY)

lines = init_particles(imax, jmax, dx, dy, 4, flag)
mark_cells(flag, dx, dy, lines)

u = new_field(imax, jmax)
v = new_field(imax, jmax)
p = new_field(imax, jmax)
boundary_values(u, v, flag)
dt = calculate_dt(100.0, 0.5, 0.05, dx, dy, u, v)

write_vtk_file("tank", 0, imax * dx, jmax * dy, imax - 2, jmax - 2, dx, dy, u, v, p)
```

## What the package does not do

The package has no pressure Poisson solver, no routine that turns a geometry
image into cell flags or reads a full set of simulation parameters at once,
and no command that runs a simulation. A time loop has to be assembled by the
caller from the functions above, together with a pressure solver of its own.