from chartpipeline.animation.planner import AnimationState, PropertyTransition, TransitionState
from chartpipeline.animation.scene import Scene

__all__ = ["AnimationState", "PropertyTransition", "Scene", "TransitionState"]
