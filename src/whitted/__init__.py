"""Recursive Whitted ray tracer.

This package renders static 3-D scenes by casting one primary ray per pixel
and shading hits with direct illumination plus recursive mirror reflection
and refraction:
- Plane, sphere and triangle primitives (smooth-shaded triangles supported)
- Point, spot and discretized area lights with hard shadows
- Phong materials with optional reflection and transmission
- Progressive row-chunked rendering with a Taichi-based preview and encoder

Subpackages:
    core: Rays, vector utilities, the recursive tracer and the renderer
    geometry: Shape primitives and intersection algorithms
    lights: Light sources and light sampling
    materials: Surface materials
    scene: Scene container, builder, OBJ loading and the demo scene
    camera: Pinhole camera with ray generation
    preview: Pixel encoding, export and preview utilities
"""

__version__ = "0.1.0"
