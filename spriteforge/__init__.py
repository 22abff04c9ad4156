"""Core of a small 2D game engine: transforms, camera, services, events, input, scenes, animation, objects, collision, batching, UI, resources and the engine loop."""

__version__ = "0.1.0"