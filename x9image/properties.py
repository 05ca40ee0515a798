import logging
from enum import Enum, auto

from .enum import LayoutMode
from .exceptions import LayoutException


class ChunkPhase(Enum):
    '''Enum to state the actual phase of a chunk'''
    INIT      = 0
    UNPACKING = auto()
    DONE      = auto()


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_chunk(instance, condition):
    while not condition(instance):
        instance = instance.father

    return instance


def resolve(value, instance):
    '''Resolve value if it's a Dependency, otherwise returns it as it is.'''
    while isinstance(value, Dependency):
        value = value.resolve(instance)

    return value


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class ImageData(Chunk):
            declared_length = fields.NumericField(4)
            image           = fields.StringField(Dependency('.declared_length'))

    and have the length of the field named 'image' read from the field
    named 'declared_length' at the moment of unpacking.

    The syntax for defining the expression is inspired from module resolution:

     - '.' indicates we refer to a field at the same level
     - no prefix indicates the path starts from the root chunk
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        self.logger.debug('trying to resolve \'%s\' for \'%s\'' % (self.expression, instance.name))

        fields_path = self.expression.split('.')
        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']

        if fields_path[0] != '':
            field = get_root_from_chunk(instance)
        else:  # we have a relative dependency
            field = instance.father
            fields_path = fields_path[1:]

        for component_name in fields_path:
            field = getattr(field, component_name)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value
        self.logger.debug(' resolved with value %s' % value)

        return value


class LayoutDependency(Dependency):
    '''The value depends on the layout mode of the record being decoded.

    Each branch can be an integer or a Dependency itself, like the image
    length that is declared in the record for the variable layout but is
    always 246 bytes for the fixed one

        LayoutDependency(fixed=246, variable=Dependency('.declared_length'))
    '''

    def __init__(self, fixed, variable):
        super().__init__('@layout')
        self.fixed = fixed
        self.variable = variable

    def __repr__(self):
        return f'<{self.__class__.__name__}(fixed={self.fixed!r}, variable={self.variable!r})>'

    def resolve(self, instance):
        layout = get_root_from_chunk(instance).layout_mode

        if layout == LayoutMode.FIXED:
            return self.fixed
        elif layout == LayoutMode.VARIABLE:
            return self.variable

        raise LayoutException(chain=[], message='layout mode not resolved, is the file header missing?')


class PropertyDescriptor(object):
    """This the glue for dependency management: reading the attribute resolves
    the Dependency, if any."""

    def __init__(self, name: str, _type: type):
        self.name = name
        self.type = _type

    def __get__(self, instance, owner):
        if instance is None:
            return self

        data = instance.__dict__
        if self.name not in data:
            raise AttributeError(f"no '{self.name}' here!")

        return resolve(data[self.name], instance)

    def __set__(self, instance, value):
        if not isinstance(value, (self.type, Dependency)):
            raise ValueError(f"A property must be of type {self.type} or a Dependency")

        instance.__dict__[self.name] = value
