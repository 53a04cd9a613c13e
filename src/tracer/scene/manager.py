"""Scene manager for building scenes and round-tripping configuration.

The SceneManager wraps the surface storage in scene.intersection with a
Python-side record of every surface added, so a scene can be exported to a
SceneConfig (or a plain dict for JSON) and rebuilt from one.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_sphere(center=(0, 0, 5), radius=0.5, color=(1, 0, 0))
    >>> scene.add_plane(normal=(0, 1, 0), distance=-1.0)
    >>> data = scene.to_dict()
"""

from dataclasses import dataclass, field
from typing import Any

from src.tracer.geometry.surface import SurfaceKind
from src.tracer.scene.intersection import (
    MAX_SURFACES,
    add_plane,
    add_sphere,
    clear_scene,
    get_surface,
    get_surface_count,
)


@dataclass
class SurfaceInfo:
    """Information about a surface in the scene.

    Attributes:
        surface_index: The index in the surface storage arrays.
        kind: The kind of surface.
        params: The geometric parameters as stored (plane normals are
            normalized).
        color: Flat RGB color of the surface.
    """

    surface_index: int
    kind: SurfaceKind
    params: dict[str, Any]
    color: tuple[float, float, float]


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        planes: List of plane configurations.
        spheres: List of sphere configurations.
    """

    planes: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)


def _to_triple(values: Any) -> tuple[float, float, float]:
    return (float(values[0]), float(values[1]), float(values[2]))


class SceneManager:
    """High-level API for building a scene of planes and spheres.

    Attributes:
        surfaces: List of SurfaceInfo for all surfaces in the scene, in
            index order.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.surfaces: list[SurfaceInfo] = []
        self.clear()

    def clear(self) -> None:
        """Clear the scene storage and local tracking."""
        clear_scene()
        self.surfaces.clear()

    def add_plane(
        self,
        normal: tuple[float, float, float],
        distance: float,
        color: tuple[float, float, float] = (1.0, 1.0, 1.0),
    ) -> int:
        """Add a plane to the scene.

        Args:
            normal: Any nonzero vector perpendicular to the plane.
            distance: Signed distance of the plane from the origin.
            color: Flat RGB color of the plane.

        Returns:
            The index of the added surface.

        Raises:
            ValueError: If the normal is zero-length.
            RuntimeError: If the maximum number of surfaces is exceeded.
        """
        index = add_plane(normal, distance, color)
        _, stored_normal, stored_distance = get_surface(index)
        self.surfaces.append(
            SurfaceInfo(
                surface_index=index,
                kind=SurfaceKind.PLANE,
                params={"normal": stored_normal, "distance": stored_distance},
                color=_to_triple(color),
            )
        )
        return index

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        color: tuple[float, float, float] = (1.0, 1.0, 1.0),
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere. Must be strictly positive.
            color: Flat RGB color of the sphere.

        Returns:
            The index of the added surface.

        Raises:
            ValueError: If the radius is not strictly positive.
            RuntimeError: If the maximum number of surfaces is exceeded.
        """
        index = add_sphere(center, radius, color)
        self.surfaces.append(
            SurfaceInfo(
                surface_index=index,
                kind=SurfaceKind.SPHERE,
                params={"center": _to_triple(center), "radius": float(radius)},
                color=_to_triple(color),
            )
        )
        return index

    def get_surface_count(self) -> int:
        """Get the number of surfaces in the scene."""
        return get_surface_count()

    def get_surface_info(self, surface_index: int) -> SurfaceInfo | None:
        """Get information about a surface by index, or None if not found."""
        if 0 <= surface_index < len(self.surfaces):
            return self.surfaces[surface_index]
        return None

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()
        for info in self.surfaces:
            entry: dict[str, Any] = {
                key: list(value) if isinstance(value, tuple) else value
                for key, value in info.params.items()
            }
            entry["color"] = list(info.color)
            if info.kind == SurfaceKind.PLANE:
                config.planes.append(entry)
            else:
                config.spheres.append(entry)
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene first. Planes are added before spheres.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If the configuration contains invalid geometry.
        """
        self.clear()

        for plane_config in config.planes:
            if "normal" not in plane_config:
                raise ValueError(f"Plane configuration is missing 'normal': {plane_config}")
            self.add_plane(
                _to_triple(plane_config["normal"]),
                float(plane_config.get("distance", 0.0)),
                _to_triple(plane_config.get("color", [1.0, 1.0, 1.0])),
            )

        for sphere_config in config.spheres:
            if "radius" not in sphere_config:
                raise ValueError(f"Sphere configuration is missing 'radius': {sphere_config}")
            self.add_sphere(
                _to_triple(sphere_config.get("center", [0.0, 0.0, 0.0])),
                float(sphere_config["radius"]),
                _to_triple(sphere_config.get("color", [1.0, 1.0, 1.0])),
            )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {"planes": config.planes, "spheres": config.spheres}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary with 'planes' and 'spheres' keys."""
        self.from_config(
            SceneConfig(planes=data.get("planes", []), spheres=data.get("spheres", []))
        )

    @staticmethod
    def get_max_surfaces() -> int:
        """Get the maximum number of surfaces supported."""
        return MAX_SURFACES
