"""
numkernel: арифметическое ядро произвольной точности

Точные и ограниченные по погрешности алгебраические типы:
комплексные числа над int и Decimal, плотные матрицы и векторы,
итеративный решатель квадратных корней (Heron's method).
"""

__version__ = "0.1.0"
