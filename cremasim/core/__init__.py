from cremasim.core.tank import BeanTank, Tank

__all__ = ["BeanTank", "Tank"]
