"""Constructive solid geometry: vectors, boxes, surfaces, cells, universes, lattices, BVH and ray tracing."""