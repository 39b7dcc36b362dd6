"""Components for the Feedback Editor

- transform_widgets: handle geometry, hit-testing and drag behaviour
- transform_object: a single manipulable feedback window
- scene: object collection, framebuffers and per-tick orchestration
- canvas_widget: PyQt5 host widget (imports Qt; import it directly)
"""
