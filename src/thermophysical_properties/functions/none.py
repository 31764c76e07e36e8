from thermophysical_properties.functions.base import ThermophysicalFunction
from thermophysical_properties.helpers import UndefinedFunction


class NoneFunction(ThermophysicalFunction):
    """Placeholder for a property that was never configured: any evaluation fails"""
    type_name = "none"
    arity = 0

    def f(self, p, T):
        raise UndefinedFunction(f'Required function "{self.name}" is not defined')

    def write(self):
        return {"typeName": self.type_name, "coefficients": []}
