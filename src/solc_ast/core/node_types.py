from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator
from pydantic_core import PydanticCustomError


class NodeCategory(str, Enum):
    EXPRESSION = "expression"
    STATEMENT = "statement"
    YUL_STATEMENT = "yul_statement"
    YUL_EXPRESSION = "yul_expression"
    YUL_LITERAL = "yul_literal"
    DEFINITION = "definition"
    DIRECTIVE = "directive"
    MISC = "misc"
    OTHER = "other"


class NodeType(str, Enum):
    """Node kinds known to this model, valued by their exact ``nodeType`` tag."""

    # Expressions
    ASSIGNMENT = "Assignment"
    BINARY_OPERATION = "BinaryOperation"
    CONDITIONAL = "Conditional"
    ELEMENTARY_TYPE_NAME_EXPRESSION = "ElementaryTypeNameExpression"
    FUNCTION_CALL = "FunctionCall"
    FUNCTION_CALL_OPTIONS = "FunctionCallOptions"
    IDENTIFIER = "Identifier"
    INDEX_ACCESS = "IndexAccess"
    INDEX_RANGE_ACCESS = "IndexRangeAccess"
    LITERAL = "Literal"
    MEMBER_ACCESS = "MemberAccess"
    NEW_EXPRESSION = "NewExpression"
    TUPLE_EXPRESSION = "TupleExpression"
    UNARY_OPERATION = "UnaryOperation"

    # Statements
    BLOCK = "Block"
    BREAK = "Break"
    CONTINUE = "Continue"
    DO_WHILE_STATEMENT = "DoWhileStatement"
    EMIT_STATEMENT = "EmitStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    FOR_STATEMENT = "ForStatement"
    IF_STATEMENT = "IfStatement"
    INLINE_ASSEMBLY = "InlineAssembly"
    PLACEHOLDER_STATEMENT = "PlaceholderStatement"
    RETURN = "Return"
    REVERT_STATEMENT = "RevertStatement"
    TRY_STATEMENT = "TryStatement"
    UNCHECKED_BLOCK = "UncheckedBlock"
    VARIABLE_DECLARATION_STATEMENT = "VariableDeclarationStatement"
    VARIABLE_DECLARATION = "VariableDeclaration"
    WHILE_STATEMENT = "WhileStatement"

    # Yul statements
    YUL_ASSIGNMENT = "YulAssignment"
    YUL_BLOCK = "YulBlock"
    YUL_BREAK = "YulBreak"
    YUL_CONTINUE = "YulContinue"
    YUL_EXPRESSION_STATEMENT = "YulExpressionStatement"
    YUL_LEAVE = "YulLeave"
    YUL_FOR_LOOP = "YulForLoop"
    YUL_FUNCTION_DEFINITION = "YulFunctionDefinition"
    YUL_IF = "YulIf"
    YUL_SWITCH = "YulSwitch"
    YUL_VARIABLE_DECLARATION = "YulVariableDeclaration"

    # Yul expressions
    YUL_FUNCTION_CALL = "YulFunctionCall"
    YUL_IDENTIFIER = "YulIdentifier"
    YUL_LITERAL = "YulLiteral"

    # Yul literals
    YUL_LITERAL_VALUE = "YulLiteralValue"
    YUL_HEX_VALUE = "YulHexValue"

    # Definitions
    CONTRACT_DEFINITION = "ContractDefinition"
    FUNCTION_DEFINITION = "FunctionDefinition"
    EVENT_DEFINITION = "EventDefinition"
    ERROR_DEFINITION = "ErrorDefinition"
    MODIFIER_DEFINITION = "ModifierDefinition"
    STRUCT_DEFINITION = "StructDefinition"
    ENUM_DEFINITION = "EnumDefinition"
    USER_DEFINED_VALUE_TYPE_DEFINITION = "UserDefinedValueTypeDefinition"

    # Directives
    PRAGMA_DIRECTIVE = "PragmaDirective"
    IMPORT_DIRECTIVE = "ImportDirective"
    USING_FOR_DIRECTIVE = "UsingForDirective"

    # Misc
    SOURCE_UNIT = "SourceUnit"
    INHERITANCE_SPECIFIER = "InheritanceSpecifier"
    ELEMENTARY_TYPE_NAME = "ElementaryTypeName"
    FUNCTION_TYPE_NAME = "FunctionTypeName"
    PARAMETER_LIST = "ParameterList"
    TRY_CATCH_CLAUSE = "TryCatchClause"
    MODIFIER_INVOCATION = "ModifierInvocation"

    def __str__(self) -> str:
        return self.value

    @property
    def category(self) -> NodeCategory:
        return _CATEGORIES[self]


@dataclass(frozen=True)
class OtherNodeType:
    """A ``nodeType`` tag this model does not know, kept verbatim."""

    name: str

    def __str__(self) -> str:
        return self.name

    @property
    def category(self) -> NodeCategory:
        return NodeCategory.OTHER


AnyNodeType = NodeType | OtherNodeType


def _group(category: NodeCategory, first: NodeType, last: NodeType) -> dict[NodeType, NodeCategory]:
    members = list(NodeType)
    return {kind: category for kind in members[members.index(first) : members.index(last) + 1]}


_CATEGORIES: dict[NodeType, NodeCategory] = {
    **_group(NodeCategory.EXPRESSION, NodeType.ASSIGNMENT, NodeType.UNARY_OPERATION),
    **_group(NodeCategory.STATEMENT, NodeType.BLOCK, NodeType.WHILE_STATEMENT),
    **_group(NodeCategory.YUL_STATEMENT, NodeType.YUL_ASSIGNMENT, NodeType.YUL_VARIABLE_DECLARATION),
    **_group(NodeCategory.YUL_EXPRESSION, NodeType.YUL_FUNCTION_CALL, NodeType.YUL_LITERAL),
    **_group(NodeCategory.YUL_LITERAL, NodeType.YUL_LITERAL_VALUE, NodeType.YUL_HEX_VALUE),
    **_group(NodeCategory.DEFINITION, NodeType.CONTRACT_DEFINITION, NodeType.USER_DEFINED_VALUE_TYPE_DEFINITION),
    **_group(NodeCategory.DIRECTIVE, NodeType.PRAGMA_DIRECTIVE, NodeType.USING_FOR_DIRECTIVE),
    **_group(NodeCategory.MISC, NodeType.SOURCE_UNIT, NodeType.MODIFIER_INVOCATION),
}

_BY_TAG: dict[str, NodeType] = {kind.value: kind for kind in NodeType}


def parse_node_type(tag: str) -> AnyNodeType:
    """Map a wire tag to a known kind by exact match, else keep it as ``OtherNodeType``."""
    known = _BY_TAG.get(tag)
    if known is not None:
        return known
    return OtherNodeType(tag)


def format_node_type(kind: AnyNodeType) -> str:
    if isinstance(kind, NodeType):
        return kind.value
    return kind.name


def _validate_node_type(value: Any) -> AnyNodeType:
    if isinstance(value, NodeType | OtherNodeType):
        return value
    if not isinstance(value, str):
        raise PydanticCustomError("node_type", "nodeType must be a string")
    return parse_node_type(value)


# Field type used by the models: validates from any tag and serializes back to the tag.
NodeTypeField = Annotated[
    AnyNodeType,
    PlainValidator(_validate_node_type),
    PlainSerializer(format_node_type, return_type=str),
]
