"""
VTK and Geometry Utilities
Helper functions converting scene primitives into PyVista PolyData.
"""
from typing import Sequence

import numpy as np
import numpy.typing as npt
import pyvista as pv

import logging

from eventdisplay.model.dimensions import Dimensions
from eventdisplay.model.geometry_primitives import Block, Plane, Quad, Track

logger = logging.getLogger(__name__)

class VtkUtils:
    @staticmethod
    def quads_to_polydata(quads: Sequence[Quad]) -> pv.PolyData:
        """Pack quads into one PolyData with a 4-point face each."""
        if not quads:
            return pv.PolyData()

        points = np.vstack([quad.to_array() for quad in quads])
        n = len(quads)
        # face cell: [4, id0, id1, id2, id3]
        ids = np.arange(4 * n, dtype=np.int_).reshape(n, 4)
        faces = np.hstack([np.full((n, 1), 4, dtype=np.int_), ids]).ravel()
        return pv.PolyData(points, faces=faces)

    @staticmethod
    def planes_to_polydata(planes: Sequence[Plane]) -> pv.PolyData:
        return VtkUtils.quads_to_polydata([plane.to_quad() for plane in planes])

    @staticmethod
    def polylines_to_polydata(polylines: Sequence[npt.NDArray[np.float64]]) -> pv.PolyData:
        """Convert a list of (N, 3) arrays into a PolyData of line cells."""
        polylines = [np.asarray(p, dtype=np.float64).reshape(-1, 3) for p in polylines]
        polylines = [p for p in polylines if p.shape[0] >= 2]
        if not polylines:
            return pv.PolyData()

        cells_list: list[npt.NDArray[np.int_]] = []
        offset = 0
        for line in polylines:
            n = line.shape[0]
            # polyline cell: [n, id0, id1, ..., id(n-1)]
            cells_list.append(np.hstack([[n], np.arange(offset, offset + n, dtype=np.int_)]))
            offset += n

        pd = pv.PolyData(np.vstack(polylines))
        pd.lines = np.concatenate(cells_list).astype(np.int_)
        return pd

    @staticmethod
    def tracks_to_polydata(tracks: Sequence[Track], resolution: int) -> pv.PolyData:
        return VtkUtils.polylines_to_polydata([track.discretize(resolution) for track in tracks])

    @staticmethod
    def circle_polyline(radius: float, z: float, n_segments: int) -> npt.NDArray[np.float64]:
        """Closed circle around the z axis at depth z, as an (N+1, 3) array."""
        theta = np.linspace(0.0, 2.0 * np.pi, n_segments, endpoint=False)
        pts = np.c_[radius * np.cos(theta), radius * np.sin(theta), np.full(n_segments, z)]
        return np.vstack((pts, pts[0]))

    @staticmethod
    def tube_polydata(dims: Dimensions, n_segments: int) -> pv.PolyData:
        """Two end circles and two axial lines of the central tube."""
        radius = dims.tube_radius * 0.5
        length = dims.tube_length
        lines = [
            VtkUtils.circle_polyline(radius, length, n_segments),
            VtkUtils.circle_polyline(radius, -length, n_segments),
            np.array([[0.0, radius, length], [0.0, radius, -length]]),
            np.array([[0.0, -radius, length], [0.0, -radius, -length]]),
        ]
        return VtkUtils.polylines_to_polydata(lines)

    @staticmethod
    def bounding_box(dims: Dimensions) -> pv.PolyData:
        half = (dims.box_width * 0.5, dims.box_height * 0.5, dims.box_depth * 0.5)
        return pv.Box(bounds=(-half[0], half[0], -half[1], half[1], -half[2], half[2]))

    @staticmethod
    def blocks_to_polydata(blocks: Sequence[Block], dims: Dimensions) -> pv.PolyData:
        """Merge one cube per block."""
        if not blocks:
            return pv.PolyData()

        cubes = [
            pv.Cube(
                center=(block.position.x, block.position.y, block.position.z),
                x_length=dims.block_width,
                y_length=dims.block_height,
                z_length=dims.block_depth,
            )
            for block in blocks
        ]
        merged = cubes[0]
        for cube in cubes[1:]:
            merged = merged.merge(cube)
        return merged
