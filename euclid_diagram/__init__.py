from .terms import Term, Hypothesis, Goal, ProofSnapshot, Span, app, const
from .parser import parse_context, parse_substance, SubstanceProgram, SubstanceSyntaxError
from .printer import format_term, print_program
from .matcher import EntityKind, PredicateShape, PredicateMatch, match_predicates
from .registry import Entity, EntityRegistry
from .builder import BuildState, DiagramProgram, build_diagram_program
from .visibility import (
    HypLocation,
    HypTypeLocation,
    TargetLocation,
    GoalsLocation,
    filter_hypotheses,
)
from .reference import DOMAIN, STYLE
from .config import DiagramConfig, get_diagram_config, set_diagram_config
from .layout import LayoutError, LayoutOptions, LayoutResult, layout_program
from .render import (
    DiagramRenderer,
    RenderRequest,
    PenroseEmbedRenderer,
    SvgPreviewRenderer,
    get_renderer,
)
from .rpc import (
    GoalLookupFailure,
    GoalRequest,
    GoalResponse,
    LocalTransport,
    RpcError,
    RpcMethodNotFound,
    RpcServer,
    get_euclidean_goal,
)
from .panel import PanelController, PanelProps, PanelState

__all__ = [
    'Term',
    'Hypothesis',
    'Goal',
    'ProofSnapshot',
    'Span',
    'app',
    'const',
    'parse_context',
    'parse_substance',
    'SubstanceProgram',
    'SubstanceSyntaxError',
    'format_term',
    'print_program',
    'EntityKind',
    'PredicateShape',
    'PredicateMatch',
    'match_predicates',
    'Entity',
    'EntityRegistry',
    'BuildState',
    'DiagramProgram',
    'build_diagram_program',
    'HypLocation',
    'HypTypeLocation',
    'TargetLocation',
    'GoalsLocation',
    'filter_hypotheses',
    'DOMAIN',
    'STYLE',
    'DiagramConfig',
    'get_diagram_config',
    'set_diagram_config',
    'LayoutError',
    'LayoutOptions',
    'LayoutResult',
    'layout_program',
    'DiagramRenderer',
    'RenderRequest',
    'PenroseEmbedRenderer',
    'SvgPreviewRenderer',
    'get_renderer',
    'GoalLookupFailure',
    'GoalRequest',
    'GoalResponse',
    'LocalTransport',
    'RpcError',
    'RpcMethodNotFound',
    'RpcServer',
    'get_euclidean_goal',
    'PanelController',
    'PanelProps',
    'PanelState',
]
