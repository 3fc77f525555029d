"""Documentation tabs content (Methodology and Architecture)."""

import streamlit as st


def render_methodology_tab() -> None:
    """Render the Methodology explanation tab."""
    st.markdown("""
## How Vector-Cloud Works

### Embeddings: Turning Text into Numbers

Each line you enter is converted into a high-dimensional vector (1536 dimensions
with OpenAI's `text-embedding-3-small` model, 256 with the offline hashing embedder).
Vectors from the OpenAI model capture **semantic meaning**: strings about similar
topics get similar vectors, regardless of the exact words used.

The offline embedder hashes character trigrams instead, so it groups strings
that are **spelled** alike rather than strings that mean the same thing.

### PCA: Three Directions That Matter Most

We use **Principal Component Analysis** to reduce the vectors down to 3D.
PCA finds the three orthogonal directions along which the batch varies the
most and measures each string along them. Unlike UMAP or t-SNE it is:

- **Deterministic**: the same batch always gives the same cloud
- **Linear**: straight-line distances are shrunk, never invented
- **Cheap**: a single SVD, fast for a few thousand strings

The **Projection Quality** chart shows how much of the total variance each
axis keeps. A low cumulative value means the cloud flattens a lot of structure.

### Normalization

The three projected coordinates are rescaled into the cube `[-1, 1]` using the
smallest and largest value over **all** coordinates, so the relative lengths of
the axes are preserved:

```
normalized = (value - min) / (max - min) * 2 - 1
```

A batch of identical vectors has nothing to spread out and is rejected.

### Highlighting

Every point is drawn as a round sprite, colored by its position. The hovered
or selected point grows, pulses and blinks toward yellow. Hover takes
precedence over the pinned selection when deciding which string to show.

### Picking

A click is matched to the point whose sprite lies nearest on screen, within
a few pixels. When sprites overlap, the point closest to the camera wins.
""")


def render_architecture_tab() -> None:
    """Render the Architecture documentation tab."""
    st.markdown("""
## System Architecture

### Data Flow Diagram

```
┌─────────────────────────────────────────────────────────────────┐
│                      Embedding Layer                             │
│  BaseEmbedder → (OpenAIEmbedder, HashingEmbedder)               │
│  • Batched requests with retry                                  │
│  • L2 normalization                                             │
└───────────────────────────────┬─────────────────────────────────┘
                                │
                                ▼
┌─────────────────────────────────────────────────────────────────┐
│                      Core                                        │
│  EmbeddingBatch → PCAProjector → normalize → PointCloudModel    │
│  • Validation before any scene change                           │
│  • Explained variance per axis                                  │
└───────────────────────────────┬─────────────────────────────────┘
                                │
                                ▼
┌─────────────────────────────────────────────────────────────────┐
│                      Visualization                               │
│  SceneGraph + HighlightShader + OrbitControls                   │
│  • Axes, axis labels, point sprites                             │
│  • Software device renders each frame to an image               │
│  • RenderLoop ticks once per scheduled frame                    │
└───────────────────────────────┬─────────────────────────────────┘
                                │
                                ▼
┌─────────────────────────────────────────────────────────────────┐
│                      Interaction                                 │
│  InteractionController + PickingEngine                          │
│  • Pointer move → hovered index                                 │
│  • Click → selected index                                       │
│  • Label callback (hover first, then selection)                 │
└─────────────────────────────────────────────────────────────────┘
```

### Adding a New Embedder

1. **Create embedder file**: `vector_cloud/embedders/your_embedder.py`

2. **Extend BaseEmbedder**:
```python
from .base import BaseEmbedder, register_embedder

@register_embedder("your_embedder")
class YourEmbedder(BaseEmbedder):
    @property
    def name(self) -> str:
        return "your_embedder"

    @property
    def dimension(self) -> int:
        return 384

    def embed(self, texts: list[str]) -> np.ndarray:
        return self.normalize(vectors)
```

3. **Add to config.py**:
```python
AVAILABLE_EMBEDDERS["your_embedder"] = {
    "label": "Your Embedder",
    "description": "...",
    "needs_api_key": False,
}
```

### Key Classes

| Class | Responsibility |
|-------|---------------|
| `EmbeddingVisualizer` | Owns scene, controls, interaction and loop |
| `PCAProjector` | Dimensionality reduction |
| `SceneGraph` | Axes, labels, point cloud and their resources |
| `HighlightShader` | Per-point size, color and alpha |
| `OrbitControls` | Camera rotation and zoom |
| `PickingEngine` | Screen position to point index |
| `RenderLoop` | Frame scheduling |
""")
